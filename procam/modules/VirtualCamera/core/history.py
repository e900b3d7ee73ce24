from dataclasses import dataclass

from .transform import IDENTITY, Transform


@dataclass(frozen=True)
class HistoryStack:
    """Undo log of committed transforms.

    Pushing after an undo discards the redo branch. The stack is never
    empty and ``index`` always points at the transform currently shown.
    """

    entries: tuple[Transform, ...] = (IDENTITY,)
    index: int = 0

    @property
    def current(self) -> Transform:
        return self.entries[self.index]

    @property
    def can_undo(self) -> bool:
        return self.index > 0

    @property
    def can_redo(self) -> bool:
        return self.index < len(self.entries) - 1

    def __len__(self) -> int:
        return len(self.entries)

    def push(self, transform: Transform) -> "HistoryStack":
        if transform.is_near(self.current):
            return self
        entries = self.entries[: self.index + 1] + (transform,)
        return HistoryStack(entries=entries, index=len(entries) - 1)

    def undo(self) -> "HistoryStack":
        if not self.can_undo:
            return self
        return HistoryStack(entries=self.entries, index=self.index - 1)

    def redo(self) -> "HistoryStack":
        if not self.can_redo:
            return self
        return HistoryStack(entries=self.entries, index=self.index + 1)

    @staticmethod
    def reset() -> "HistoryStack":
        return HistoryStack()
