"""
Edge case tests for mapping.

Tests handling of inaccessible fields, unsupported field types, missing
annotations, and fault logging.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Optional

import pytest

from tagmap import Document, DocumentParseError, map_json, tagged
from tagmap.descriptors import zero_instance

from .fixtures import (
    PERSON_DOCUMENT,
    Frozen,
    Person,
    Required,
    Untagged,
    WithPrivate,
    WithUnsupported,
)


class TestInaccessibleFields:
    """Fields without a settable slot are never written."""

    def test_private_field_skipped(self):
        target = WithPrivate()
        map_json(b'{"public": "p", "secret": "leaked"}', target)
        assert target.public == "p"
        assert target._secret == "keep"

    def test_frozen_dataclass_untouched(self):
        """Frozen instances are skipped instead of raising."""
        target = Frozen(value="original")
        result = map_json(b'{"value": "new"}', target)
        assert target.value == "original"
        assert result.written == []


class TestUnsupportedFields:
    """Lists and dicts are not mapped."""

    def test_unsupported_left_alone(self):
        target = WithUnsupported()
        map_json(b'{"items": [1, 2], "lookup": {"a": 1}, "name": "n"}', target)
        assert target.items == []
        assert target.lookup == {}
        assert target.name == "n"


class TestMissingAnnotations:
    """A field without annotation resolves to the empty key."""

    def test_empty_key_present(self):
        target = Untagged()
        map_json(b'{"": "from empty key", "value": "by name"}', target)
        assert target.value == "from empty key"

    def test_empty_key_absent(self):
        """Field names are never used as a fallback path."""
        target = Untagged()
        map_json(b'{"value": "by name"}', target)
        assert target.value == "unset"


class TestRequiredFields:
    """Targets without defaults can be built and mapped."""

    def test_zero_instance_then_map(self):
        target = zero_instance(Required)
        result = map_json(
            b'{"name": "n", "count": 70000, "when": "2003-01", "inner": {"city": "c"}, "maybe": 1}',
            target,
        )
        assert target.name == "n"
        assert target.count == 70000 - 65536
        assert target.when.year == 2003
        assert target.inner.city == "c"
        assert target.maybe == 1
        assert not result.has_faults


class TestLocalTargets:
    """Dataclasses defined inside a function."""

    def test_local_nested_class(self):
        """Annotations evaluated at definition time resolve without globals."""

        @dataclass
        class Inner:
            city: str = tagged("city", default="")

        @dataclass
        class Outer:
            inner: Optional[Inner] = tagged("inner", default=None)

        target = Outer()
        map_json(b'{"inner": {"city": "Berlin"}}', target)
        assert target.inner == Inner(city="Berlin")

    def test_unresolvable_forward_reference(self):
        """A string annotation naming a local class raises TypeError naming the field."""

        @dataclass
        class Inner:
            city: str = tagged("city", default="")

        @dataclass
        class Outer:
            inner: Optional["Inner"] = tagged("inner", default=None)

        with pytest.raises(TypeError, match=r"Outer\.inner"):
            map_json(b'{"inner": {"city": "Berlin"}}', Outer())


class TestDeepDocuments:
    """Documents the decoder cannot descend into."""

    def test_deep_nesting_is_a_parse_error(self):
        target = Person(name="keep")
        with pytest.raises(DocumentParseError):
            map_json(b"[" * 100000 + b"]" * 100000, target)
        assert target.name == "keep"


class TestLogging:
    """Recoverable faults are logged as warnings."""

    def test_timestamp_fault_logged(self, caplog):
        from .fixtures import Times

        with caplog.at_level(logging.WARNING, logger="tagmap"):
            map_json(b'{"at": "soon"}', Times())
        assert "soon" in caplog.text

    def test_summary_logged(self, caplog):
        with caplog.at_level(logging.INFO, logger="tagmap"):
            map_json(b'{"name": "x"}', Person())
        assert "Mapped Person" in caplog.text


class TestSharedDocument:
    """One parsed document can feed concurrent mappings of distinct targets."""

    def test_threads(self):
        doc = Document.parse(PERSON_DOCUMENT)
        targets = [Person() for _ in range(8)]
        threads = [threading.Thread(target=map_json, args=(doc, t)) for t in targets]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        assert all(t == targets[0] for t in targets)
        assert targets[0].address.city == "Berlin"
