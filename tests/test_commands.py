import unittest

from segcut.commands import (
    AddSegment,
    Label,
    RemoveSegment,
    Reorder,
    SegmentListState,
    SelectIndex,
    SetInvert,
    Split,
    apply_command,
)
from segcut.model import InvariantViolation, Segment
from segcut.reorder_prompt import begin_reorder_prompt, commit_reorder


def _state(n=3, current=0, invert=False):
    segs = [Segment(id=f"s{i}", start=i * 10.0, end=i * 10.0 + 5.0) for i in range(n)]
    return SegmentListState.create(segs, current_index=current, invert=invert)


class TestApplyCommand(unittest.TestCase):
    def test_select(self):
        st = _state()
        new, res = apply_command(st, SelectIndex(2))
        self.assertTrue(res.changed)
        self.assertEqual(new.current_index, 2)
        self.assertEqual(new.current_segment.id, "s2")

    def test_select_ignored_in_invert_mode(self):
        st = _state(invert=True)
        new, res = apply_command(st, SelectIndex(2))
        self.assertIs(new, st)
        self.assertFalse(res.changed)

    def test_select_out_of_range(self):
        st = _state()
        new, res = apply_command(st, SelectIndex(3))
        self.assertIs(new, st)
        self.assertFalse(res.changed)

    def test_reorder_moves_current(self):
        st = _state(current=0)
        new, res = apply_command(st, Reorder(0, 2))
        self.assertTrue(res.changed)
        self.assertEqual([s.id for s in new.segments], ["s1", "s2", "s0"])
        self.assertEqual(new.current_index, 2)
        self.assertEqual(new.current_segment.id, "s0")

    def test_rejected_reorder_keeps_state(self):
        st = _state(current=1)
        new, res = apply_command(st, Reorder(1, 3))
        self.assertIs(new, st)
        self.assertFalse(res.changed)
        self.assertEqual(res.current_index, 1)

    def test_reorder_prompt_commits_in_invert_mode(self):
        st = _state(current=0, invert=True)
        draft = begin_reorder_prompt(st.current_index, len(st.segments))
        self.assertIsNotNone(draft)
        new, res = apply_command(st, commit_reorder(draft, "3"))
        self.assertTrue(res.changed)
        self.assertTrue(new.invert)
        self.assertEqual([s.id for s in new.segments], ["s1", "s2", "s0"])
        self.assertEqual(new.current_index, 2)

    def test_add_selects_new_segment(self):
        st = _state(n=1)
        new, res = apply_command(st, AddSegment(20.0, 30.0))
        self.assertTrue(res.changed)
        self.assertEqual(len(new.segments), 2)
        self.assertEqual(new.current_index, 1)

    def test_remove_never_empties(self):
        st = _state(n=2, current=1)
        new, _ = apply_command(st, RemoveSegment(1))
        self.assertEqual(len(new.segments), 1)
        self.assertEqual(new.current_index, 0)
        newer, res = apply_command(new, RemoveSegment(0))
        self.assertIs(newer, new)
        self.assertFalse(res.changed)

    def test_split_then_label(self):
        st = _state(n=1)
        new, res = apply_command(st, Split(0, 2.0))
        self.assertTrue(res.changed)
        self.assertEqual(len(new.segments), 2)
        self.assertEqual(new.current_index, 0)
        labeled, res = apply_command(new, Label(1, "tail"))
        self.assertTrue(res.changed)
        self.assertEqual(labeled.segments[1].name, "tail")
        self.assertEqual(labeled.segments[0].name, "")

    def test_split_outside_segment_rejected(self):
        st = _state(n=2, current=0)
        new, res = apply_command(st, Split(0, 7.0))
        self.assertIs(new, st)
        self.assertFalse(res.changed)

    def test_set_invert(self):
        st = _state()
        new, res = apply_command(st, SetInvert(True))
        self.assertTrue(new.invert)
        self.assertTrue(res.changed)
        same, res = apply_command(new, SetInvert(True))
        self.assertIs(same, new)
        self.assertFalse(res.changed)

    def test_unknown_command(self):
        with self.assertRaises(TypeError):
            apply_command(_state(), object())

    def test_create_rejects_duplicate_ids(self):
        segs = [Segment(id="x", start=0.0, end=1.0), Segment(id="x", start=2.0, end=3.0)]
        with self.assertRaises(InvariantViolation):
            SegmentListState.create(segs)

    def test_create_empty_has_no_selection(self):
        st = SegmentListState.create([])
        self.assertIsNone(st.current_index)
        self.assertIsNone(st.current_segment)


if __name__ == "__main__":
    unittest.main()
