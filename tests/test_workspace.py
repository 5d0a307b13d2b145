"""Tests for workspace storage and the workspace store."""

import json
from pathlib import Path

import pytest
from unittest.mock import patch

import workspace
from config import Settings
from contracts import DocumentStatus, Milestone
from errors import StatusTransitionError, StorageError
from generator import generate_mock_drafts
from intake import SAMPLE_A
from workspace import (
    STORAGE_KEY,
    InMemoryStorage,
    JsonFileStorage,
    WorkspaceStore,
)


@pytest.fixture
def store():
    s = WorkspaceStore(InMemoryStorage())
    s.set_drafts(generate_mock_drafts(SAMPLE_A))
    return s


class TestJsonFileStorage:
    """Test file persistence."""

    def test_save_and_load_round_trip(self, tmp_path):
        """Drafts survive a save and reload."""
        storage = JsonFileStorage(tmp_path / "ws")
        store = WorkspaceStore(storage)
        pair = generate_mock_drafts(SAMPLE_A)
        store.set_drafts(pair)

        path = tmp_path / "ws" / f"{STORAGE_KEY}.json"
        assert path.exists()
        data = json.loads(path.read_text(encoding="utf-8"))
        assert "outOfScope" in data["sow"]

        reloaded = WorkspaceStore(JsonFileStorage(tmp_path / "ws"))
        reloaded.load()
        assert reloaded.sow.id == pair.sow.id
        assert reloaded.proposal.meta.title == pair.proposal.meta.title

    def test_missing_file_loads_none(self, tmp_path):
        """A missing file loads as None."""
        assert JsonFileStorage(tmp_path).load() is None

    def test_corrupt_file_loads_none(self, tmp_path):
        """A corrupt file loads as None."""
        (tmp_path / f"{STORAGE_KEY}.json").write_text("{not json", encoding="utf-8")
        assert JsonFileStorage(tmp_path).load() is None

    def test_clear_removes_file(self, tmp_path):
        """clear() removes the blob."""
        storage = JsonFileStorage(tmp_path)
        WorkspaceStore(storage).set_drafts(generate_mock_drafts(SAMPLE_A))
        storage.clear()
        assert storage.load() is None

    def test_default_directory_is_outside_the_package(self):
        """The default workspace directory is not the workspace import package."""
        default = Path(Settings.model_fields["workspace_dir"].default)
        package_dir = Path(workspace.__file__).resolve().parent
        assert default.resolve() != package_dir
        assert default.name == ".sowsmith"

    def test_write_failure_is_a_noop(self, tmp_path):
        """A failed write keeps in-memory state."""
        storage = JsonFileStorage(tmp_path)
        store = WorkspaceStore(storage)
        with patch.object(JsonFileStorage, "_write", side_effect=StorageError("disk full")):
            store.set_drafts(generate_mock_drafts(SAMPLE_A))
            assert store.save() is False
        assert store.sow is not None
        assert storage.load() is None


class TestStoreLifecycle:
    """Test load/save/reset."""

    def test_in_memory_persistence(self, store):
        """In-memory storage reloads into a new store."""
        fresh = WorkspaceStore(store.storage)
        fresh.load()
        assert fresh.sow.id == store.sow.id

    def test_reset_clears_state_and_storage(self, store):
        """reset() empties state and storage."""
        store.reset()
        assert store.sow is None
        assert store.storage.load() is None

    def test_autosave_off(self):
        """With autosave off only save() persists."""
        storage = InMemoryStorage()
        store = WorkspaceStore(storage, autosave=False)
        store.set_drafts(generate_mock_drafts(SAMPLE_A))
        assert storage.load() is None
        assert store.save() is True
        assert storage.load().sow.id == store.sow.id

    def test_get_document_by_name_or_id(self, store):
        """Documents resolve by name or id."""
        assert store.get_document("sow") is store.sow
        assert store.get_document(store.proposal.id) is store.proposal
        with pytest.raises(KeyError):
            store.get_document("missing")


class TestUpdateSection:
    """Section edits mirror into top-level fields."""

    def test_text_section(self, store):
        """Text sections take a string."""
        store.update_section("sow", "exec-summary", "New summary")
        assert store.sow.get_section("exec-summary").content == "New summary"

    def test_bullets_from_text(self, store):
        """Bullet text is split and stripped."""
        store.update_section("sow", "assumptions", "- First\n- Second\n\n")
        assert store.sow.get_section("assumptions").content == ["First", "Second"]
        assert store.sow.assumptions == ["First", "Second"]

    def test_out_of_scope_mirrors(self, store):
        """Out-of-scope edits mirror to the field."""
        store.update_section("sow", "out-of-scope", ["Nothing"])
        assert store.sow.out_of_scope == ["Nothing"]

    def test_timeline_mirrors_to_milestones(self, store):
        """Timeline edits mirror to milestones."""
        store.update_section("sow", "timeline", [{"id": "m1", "title": "All", "startWeek": 1, "endWeek": 12}])
        assert store.sow.milestones == [Milestone(id="m1", title="All", start_week=1, end_week=12)]

    def test_pricing_from_json_text(self, store):
        """Pricing accepts JSON text."""
        store.update_section("sow", "pricing", json.dumps({"model": "Fixed", "fixed": {"total": 99000}}))
        assert store.sow.pricing.fixed.total == 99000
        assert store.sow.get_section("pricing").content == store.sow.pricing

    def test_wrong_shape_rejected_and_state_kept(self, store):
        """Bad content raises and changes nothing."""
        before = store.sow.pricing
        with pytest.raises(ValueError):
            store.update_section("sow", "pricing", [{"description": "a", "mitigation": "b"}])
        assert store.sow.pricing == before

    def test_proposal_edit_leaves_sow(self, store):
        """Proposal edits leave the SOW alone."""
        store.update_section("proposal", "objectives", ["Only proposal"])
        assert store.sow.get_section("objectives").content != ["Only proposal"]

    def test_markdown_not_rerendered_until_refresh(self, store):
        """Markdown changes only on refresh."""
        original = store.sow.markdown
        store.update_section("sow", "objectives", ["Brand new objective"])
        assert store.sow.markdown == original
        refreshed = store.refresh_markdown("sow")
        assert "- Brand new objective" in refreshed

    def test_unknown_section(self, store):
        """Unknown sections raise KeyError."""
        with pytest.raises(KeyError):
            store.update_section("sow", "nope", "x")


class TestStatus:
    """Status moves forward only."""

    def test_forward(self, store):
        """Forward moves apply to one document."""
        store.update_status("sow", "In Review")
        store.update_status("sow", DocumentStatus.APPROVED)
        assert store.sow.status == DocumentStatus.APPROVED
        assert store.proposal.status == DocumentStatus.DRAFT

    def test_backward_raises(self, store):
        """Backward moves raise."""
        store.update_status("sow", DocumentStatus.APPROVED)
        with pytest.raises(StatusTransitionError):
            store.update_status("sow", DocumentStatus.DRAFT)
        assert store.sow.status == DocumentStatus.APPROVED


class TestVersionsAndComments:
    """Snapshots and review threads."""

    def test_version_is_a_snapshot(self, store):
        """Versions are deep copies."""
        version = store.add_version(store.sow, "Initial draft")
        store.update_section("sow", "objectives", ["Changed"])
        assert version.draft.get_section("objectives").content != ["Changed"]
        assert version.id.startswith("v-")
        assert store.versions_for(store.sow.id) == [version]

    def test_comment_thread(self, store):
        """Comments take replies and resolve."""
        comment = store.add_comment("pricing", "Is this firm?", "Dana")
        store.reply_to_comment(comment.id, "Yes, for 30 days", "Sam")
        store.resolve_comment(comment.id)
        assert comment.resolved
        assert comment.replies[0].author == "Sam"
        assert store.comments_for("pricing", include_resolved=False) == []

    def test_unknown_comment(self, store):
        """Unknown comments raise KeyError."""
        with pytest.raises(KeyError):
            store.resolve_comment("comment-0")


class TestChanges:
    """Proposed edits and their review."""

    def test_accept_applies_to_sow(self, store):
        """Accepting a SOW change edits the SOW."""
        change = store.propose_change("sow", "objectives", "Ship faster\nSpend less", "Dana")
        assert change.before == "\n".join(SAMPLE_A.project.objectives)
        store.accept_change(change.id)
        assert change.status == "accepted"
        assert store.sow.get_section("objectives").content == ["Ship faster", "Spend less"]
        assert store.pending_changes() == []

    def test_accept_applies_to_proposing_document(self, store):
        """A change proposed on the Proposal edits the Proposal only."""
        sow_objectives = list(store.sow.get_section("objectives").content)
        change = store.propose_change("proposal", "objectives", "Only proposal objective", "pm")
        assert change.doc_id == store.proposal.id

        store.accept_change(change.id)
        assert store.proposal.get_section("objectives").content == ["Only proposal objective"]
        assert store.sow.get_section("objectives").content == sow_objectives

    def test_change_without_document_applies_to_sow(self, store):
        """Changes saved before documents were recorded still target the SOW."""
        change = store.add_change("exec-summary", "old", "new", "Dana")
        assert change.doc_id is None
        store.accept_change(change.id)
        assert store.sow.get_section("exec-summary").content == "new"
        assert store.proposal.get_section("exec-summary").content != "new"

    def test_change_document_survives_reload(self, store):
        """The target document is part of the persisted change."""
        change = store.propose_change("proposal", "exec-summary", "Reworded", "pm")
        fresh = WorkspaceStore(store.storage)
        fresh.load()
        fresh.accept_change(change.id)
        assert fresh.proposal.get_section("exec-summary").content == "Reworded"

    def test_reject_leaves_document(self, store):
        """Rejecting leaves the document alone."""
        change = store.add_change("exec-summary", "old", "new", "Dana")
        store.reject_change(change.id)
        assert change.status == "rejected"
        assert store.sow.get_section("exec-summary").content != "new"

    def test_accept_twice_is_noop(self, store):
        """Accepting twice does nothing the second time."""
        change = store.add_change("exec-summary", "old", "first", "Dana")
        store.accept_change(change.id)
        store.update_section("sow", "exec-summary", "edited later")
        store.accept_change(change.id)
        assert store.sow.get_section("exec-summary").content == "edited later"

    def test_diff_change(self, store):
        """Change diffs come from before and after."""
        change = store.add_change("exec-summary", "a\nb\nc", "a\nB\nc", "Dana")
        diff = store.diff_change(change.id)
        assert diff.removed == ["b"]
        assert diff.added == ["B"]
        assert diff.unchanged == ["a", "c"]
