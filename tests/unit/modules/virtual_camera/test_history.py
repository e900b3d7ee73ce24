from procam.modules.VirtualCamera.core import IDENTITY, HistoryStack, Transform


A = Transform(scale=2.0)
B = Transform(x=50.0)
C = Transform(rotation=90.0)


class TestPush:
    def test_starts_with_identity(self):
        stack = HistoryStack()
        assert stack.entries == (IDENTITY,)
        assert stack.index == 0
        assert not stack.can_undo
        assert not stack.can_redo

    def test_push_appends_and_moves_index(self):
        stack = HistoryStack().push(A).push(B)
        assert stack.entries == (IDENTITY, A, B)
        assert stack.index == 2
        assert stack.current == B

    def test_duplicate_push_is_noop(self):
        stack = HistoryStack().push(A)
        again = stack.push(Transform(scale=2.0005, x=0.05))
        assert again is stack
        assert len(again) == 2

    def test_push_after_undo_truncates_redo_branch(self):
        stack = HistoryStack().push(A).push(B).undo().push(C)
        assert stack.entries == (IDENTITY, A, C)
        assert stack.index == 2
        assert not stack.can_redo


class TestUndoRedo:
    def test_undo_then_redo_round_trip(self):
        stack = HistoryStack().push(A).push(B)
        undone = stack.undo()
        assert undone.current == A
        assert undone.redo().current == B
        assert undone.redo().entries == stack.entries

    def test_undo_at_bottom_is_noop(self):
        stack = HistoryStack()
        assert stack.undo() is stack

    def test_redo_at_top_is_noop(self):
        stack = HistoryStack().push(A)
        assert stack.redo() is stack

    def test_undo_never_changes_entries(self):
        stack = HistoryStack().push(A).push(B)
        assert stack.undo().undo().entries == stack.entries


class TestReset:
    def test_reset_is_single_identity(self):
        stack = HistoryStack().push(A).push(B).reset()
        assert stack.entries == (IDENTITY,)
        assert stack.index == 0
