import pytest

from flashscope.flash.store import FLASH_SESSION_KEY, FlashNow, FlashStore


def test_get_absent_key_returns_none():
    flash = FlashStore()
    assert flash.get("missing") is None
    assert flash["missing"] is None
    assert flash.get("missing", "fallback") == "fallback"


def test_set_returns_value_and_clears_used_marker():
    flash = FlashStore()
    flash.discard("notice")
    assert flash.set("notice", "Saved") == "Saved"
    assert flash["notice"] == "Saved"
    assert not flash.used("notice")


def test_item_assignment_behaves_like_set():
    flash = FlashStore()
    flash["notice"] = "Saved"
    flash.sweep()
    assert flash["notice"] == "Saved"


def test_sweep_marks_fresh_entries_then_removes_them():
    flash = FlashStore()
    flash["notice"] = "Saved"

    assert flash.sweep() == (1, 0)
    assert flash["notice"] == "Saved"
    assert flash.used("notice")

    assert flash.sweep() == (0, 1)
    assert "notice" not in flash
    assert not flash.used("notice")


def test_sweep_on_empty_store_is_noop():
    flash = FlashStore()
    assert flash.sweep() == (0, 0)
    assert len(flash) == 0
    assert not flash


def test_now_is_visible_immediately_but_marked_used():
    flash = FlashStore()
    now = flash.now
    assert isinstance(now, FlashNow)

    now["error"] = "Bad input"
    assert flash["error"] == "Bad input"
    assert now["error"] == "Bad input"
    assert flash.used("error")

    flash.sweep()
    assert flash["error"] is None


def test_now_set_returns_value():
    flash = FlashStore()
    assert flash.now.set("error", "Bad input") == "Bad input"
    assert flash.now.get("other", "x") == "x"


def test_keep_single_key_survives_another_sweep():
    flash = FlashStore({"notice": "A"})
    flash.sweep()
    assert flash.keep("notice") == "A"
    flash.sweep()
    assert flash["notice"] == "A"
    flash.sweep()
    assert flash["notice"] is None


def test_keep_without_key_keeps_everything_and_returns_store():
    flash = FlashStore({"notice": "A", "alert": "B"})
    flash.sweep()
    assert flash.keep() is flash
    flash.sweep()
    assert flash == {"notice": "A", "alert": "B"}


def test_discard_single_key():
    flash = FlashStore()
    flash["notice"] = "A"
    flash["alert"] = "B"
    assert flash.discard("alert") == "B"
    flash.sweep()
    assert flash == {"notice": "A"}


def test_bare_discard_is_a_snapshot_of_current_keys():
    flash = FlashStore()
    flash["notice"] = "A"
    assert flash.discard() is flash
    flash["late"] = "B"

    flash.sweep()
    assert flash.to_dict() == {"late": "B"}


def test_update_marks_every_key_unused():
    flash = FlashStore({"warning": "old"})
    flash.sweep()
    assert flash.used("warning")

    flash.update({"warning": "Low disk", "info": "hi"})
    assert not flash.used("warning")
    assert not flash.used("info")
    flash.sweep()
    assert flash == {"warning": "Low disk", "info": "hi"}


def test_merge_is_update_alias():
    flash = FlashStore()
    flash.merge(warning="Low disk")
    assert flash["warning"] == "Low disk"


def test_replace_resets_used_markers():
    flash = FlashStore()
    flash.now["error"] = "x"
    flash.replace({"notice": "restored"})
    assert flash.to_dict() == {"notice": "restored"}
    assert not flash.used("error")
    assert not flash.used("notice")


def test_pop_and_delete_prune_used_markers():
    flash = FlashStore({"a": 1, "b": 2})
    flash.discard()
    assert flash.pop("a") == 1
    assert flash.delete("b") == 2
    assert flash.pop("missing") is None
    assert not flash.used("a")
    assert not flash.used("b")


def test_reject_removes_matching_entries():
    flash = FlashStore({"a": 1, "b": 2, "c": 3})
    flash.discard()
    flash.reject(lambda key, value: value % 2 == 1)
    assert flash.to_dict() == {"b": 2}
    assert not flash.used("a")
    assert flash.used("b")


def test_clear_empties_entries_and_markers():
    flash = FlashStore({"a": 1})
    flash.discard()
    flash.clear()
    assert len(flash) == 0
    assert not flash.used("a")


def test_sweep_prunes_markers_for_keys_never_present():
    flash = FlashStore()
    flash.discard("ghost")
    assert flash.used("ghost")
    flash.sweep()
    assert not flash.used("ghost")


def test_iteration_while_deleting_does_not_raise():
    flash = FlashStore({"a": 1, "b": 2})
    for key in flash:
        flash.delete(key)
    assert flash.sweep() == (0, 0)


def test_mapping_helpers():
    flash = FlashStore({"a": 1})
    assert flash.keys() == ["a"]
    assert flash.values() == [1]
    assert flash.items() == [("a", 1)]
    assert "a" in flash
    assert flash == FlashStore({"a": 1})
    assert "FlashStore" in repr(flash)


@pytest.mark.parametrize("value", [None, "not a mapping", ["a"], 42])
def test_from_session_ignores_non_mappings(value):
    assert len(FlashStore.from_session(value)) == 0


def test_from_session_starts_with_no_used_markers():
    flash = FlashStore.from_session({"notice": "A"})
    assert flash["notice"] == "A"
    assert not flash.used("notice")


class _Sink:
    def __init__(self):
        self.data = {}

    def write(self, slot, value):
        self.data[slot] = value


def test_store_writes_only_entries_that_survive():
    flash = FlashStore()
    flash["notice"] = "Saved"
    flash.now["error"] = "Bad input"
    sink = _Sink()

    assert flash.store(sink) is True
    assert sink.data == {FLASH_SESSION_KEY: {"notice": "Saved"}}


def test_store_empty_store_is_noop():
    sink = _Sink()
    flash = FlashStore()
    flash.sweep()
    assert flash.store(sink) is False
    assert sink.data == {}


def test_store_all_used_is_noop():
    sink = _Sink()
    flash = FlashStore({"notice": "old"})
    flash.sweep()
    assert flash.store(sink, key="custom") is False
    assert sink.data == {}


def test_non_string_keys_are_stored_as_strings():
    flash = FlashStore()
    assert flash.set(1, "x") == "x"
    flash.now[("a", 2)] = "y"

    assert flash.keys() == ["1", "('a', 2)"]
    assert flash[1] == "x"
    assert flash["1"] == "x"
    assert 1 in flash
    assert flash.used(("a", 2))
    assert flash.keep(1) == "x"
    assert flash.pop(1) == "x"


def test_update_and_replace_convert_keys():
    flash = FlashStore()
    flash.update({7: "seven"})
    assert flash.to_dict() == {"7": "seven"}
    assert flash == {7: "seven"}

    flash.replace({8: "eight"})
    assert flash.get(8) == "eight"


def test_non_string_key_reads_back_after_session_round_trip():
    flash = FlashStore()
    flash[1] = "x"
    sink = _Sink()
    flash.store(sink)

    reloaded = FlashStore.from_session(sink.data[FLASH_SESSION_KEY])
    reloaded.sweep()
    assert reloaded.get(1) == "x"
