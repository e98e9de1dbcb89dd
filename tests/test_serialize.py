"""Tests for serialization module."""

import json
from pathlib import Path

from difflines.config import SectionConfig
from difflines.sections import Section
from difflines.serialize import DeterministicSerializer
from difflines.vcs import Snapshot

SNAPSHOT = Snapshot(
    reference="main",
    commit_id="a" * 40,
    tree_id="b" * 40,
    repo_root=Path("/work/repo"),
)

SECTIONS = [
    Section("bar.rs", 1, 2),
    Section("bar.rs", 5, 9),
    Section("foo.rs", 3, 4),
]


class TestDeterministicSerializer:
    """Test DeterministicSerializer class."""

    def test_serialize_output_structure(self):
        """Payload holds provenance and sections in extraction order."""
        serializer = DeterministicSerializer(SectionConfig(extension=".rs"))

        payload = serializer.serialize_output(SECTIONS, SNAPSHOT, "2.39.2")

        assert payload["sections"] == [
            {"file_name": "bar.rs", "line_start": 1, "line_end": 2},
            {"file_name": "bar.rs", "line_start": 5, "line_end": 9},
            {"file_name": "foo.rs", "line_start": 3, "line_end": 4},
        ]
        provenance = payload["provenance"]
        assert provenance["reference"] == "main"
        assert provenance["commit_id"] == "a" * 40
        assert provenance["tree_id"] == "b" * 40
        assert provenance["repo_root"] == str(Path("/work/repo"))
        assert provenance["git_version"] == "2.39.2"
        assert provenance["extension"] == ".rs"
        assert len(provenance["checksum"]) == 64

    def test_section_order_is_not_changed(self):
        """Sections are serialized exactly in the order given."""
        serializer = DeterministicSerializer()
        reversed_sections = list(reversed(SECTIONS))

        payload = serializer.serialize_output(reversed_sections, SNAPSHOT, "2.39.2")

        assert [s["line_start"] for s in payload["sections"]] == [3, 5, 1]

    def test_checksum_is_stable(self):
        """Identical inputs give identical checksums."""
        serializer = DeterministicSerializer()

        first = serializer.serialize_output(SECTIONS, SNAPSHOT, "2.39.2")
        second = serializer.serialize_output(list(SECTIONS), SNAPSHOT, "2.39.2")

        assert first["provenance"]["checksum"] == second["provenance"]["checksum"]

    def test_checksum_tracks_sections(self):
        """Different sections give different checksums."""
        serializer = DeterministicSerializer()

        first = serializer.serialize_output(SECTIONS, SNAPSHOT, "2.39.2")
        second = serializer.serialize_output(SECTIONS[:1], SNAPSHOT, "2.39.2")

        assert first["provenance"]["checksum"] != second["provenance"]["checksum"]

    def test_to_json_string_round_trips(self):
        """Rendered JSON parses back to the payload."""
        serializer = DeterministicSerializer()
        payload = serializer.serialize_output(SECTIONS, SNAPSHOT, "2.39.2")

        assert json.loads(serializer.to_json_string(payload)) == payload

    def test_to_text(self):
        """Text rendering prints one range per line."""
        serializer = DeterministicSerializer()
        payload = serializer.serialize_output(SECTIONS, SNAPSHOT, "2.39.2")

        assert serializer.to_text(payload) == "bar.rs:1-2\nbar.rs:5-9\nfoo.rs:3-4"

    def test_to_text_empty(self):
        """No sections render as an empty string."""
        serializer = DeterministicSerializer()
        payload = serializer.serialize_output([], SNAPSHOT, "2.39.2")

        assert serializer.to_text(payload) == ""

    def test_envelopes(self):
        """Success and error envelopes have the documented shape."""
        serializer = DeterministicSerializer()

        assert serializer.create_success_envelope({"x": 1}) == {"ok": True, "data": {"x": 1}}
        assert serializer.create_error_envelope("DIFF_FAILED", "boom") == {
            "ok": False,
            "error": {"code": "DIFF_FAILED", "message": "boom"},
        }
        assert serializer.create_error_envelope("X", "y", {"k": "v"})["error"]["details"] == {
            "k": "v"
        }
