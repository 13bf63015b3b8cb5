import unittest

from segcut.shortcuts import (
    ACTION_ADD,
    ACTION_LABEL,
    ACTION_MOVE_DOWN,
    ACTION_MOVE_UP,
    ACTION_REDO,
    ACTION_REMOVE,
    ACTION_REORDER,
    ACTION_SELECT_NEXT,
    ACTION_SELECT_PREV,
    ACTION_SHOW_SHORTCUTS,
    ACTION_SPLIT,
    ACTION_TOGGLE_INVERT,
    ACTION_UNDO,
    resolve_shortcut_action,
    shortcut_legend,
)


class TestShortcuts(unittest.TestCase):
    def test_plain_actions(self):
        self.assertEqual(resolve_shortcut_action(key="+"), ACTION_ADD)
        self.assertEqual(resolve_shortcut_action(key="add"), ACTION_ADD)
        self.assertEqual(resolve_shortcut_action(key="Delete"), ACTION_REMOVE)
        self.assertEqual(resolve_shortcut_action(key="Backspace"), ACTION_REMOVE)
        self.assertEqual(resolve_shortcut_action(key="s"), ACTION_SPLIT)
        self.assertEqual(resolve_shortcut_action(key="L"), ACTION_LABEL)
        self.assertEqual(resolve_shortcut_action(key="o"), ACTION_REORDER)
        self.assertEqual(resolve_shortcut_action(key="i"), ACTION_TOGGLE_INVERT)
        self.assertEqual(resolve_shortcut_action(key="Arrow Up"), ACTION_SELECT_PREV)
        self.assertEqual(resolve_shortcut_action(key="down"), ACTION_SELECT_NEXT)

    def test_primary_modifier_actions_ctrl_or_meta(self):
        self.assertEqual(resolve_shortcut_action(key="z", ctrl=True), ACTION_UNDO)
        self.assertEqual(resolve_shortcut_action(key="z", meta=True), ACTION_UNDO)
        self.assertEqual(resolve_shortcut_action(key="y", ctrl=True), ACTION_REDO)
        self.assertEqual(resolve_shortcut_action(key="z", ctrl=True, shift=True), ACTION_REDO)
        self.assertEqual(resolve_shortcut_action(key="up", ctrl=True), ACTION_MOVE_UP)
        self.assertEqual(resolve_shortcut_action(key="down", meta=True), ACTION_MOVE_DOWN)
        self.assertIsNone(resolve_shortcut_action(key="s", ctrl=True))

    def test_typing_focus_blocks_plain_shortcuts(self):
        self.assertIsNone(resolve_shortcut_action(key="s", typing_focus=True))
        self.assertIsNone(resolve_shortcut_action(key="up", typing_focus=True))
        self.assertIsNone(resolve_shortcut_action(key="delete", typing_focus=True))
        # Modifier shortcuts should still work while typing.
        self.assertEqual(resolve_shortcut_action(key="z", ctrl=True, typing_focus=True), ACTION_UNDO)

    def test_help_shortcuts(self):
        self.assertEqual(resolve_shortcut_action(key="f1"), ACTION_SHOW_SHORTCUTS)
        self.assertEqual(resolve_shortcut_action(key="?", typing_focus=True), ACTION_SHOW_SHORTCUTS)
        self.assertEqual(resolve_shortcut_action(key="/", shift=True), ACTION_SHOW_SHORTCUTS)

    def test_alt_is_ignored(self):
        self.assertIsNone(resolve_shortcut_action(key="s", alt=True))

    def test_legend_not_empty(self):
        legend = shortcut_legend()
        self.assertTrue(legend)
        self.assertTrue(all(len(row) == 2 for row in legend))


if __name__ == "__main__":
    unittest.main()
