from ..core import (
    CommitTransform, PreviewTransform, Redo, Store, ToggleAspectRatio, Transform, Undo,
)


class TransformState:
    """Handle over the store for code that edits the transform.

    ``preview`` is a transient write; ``commit`` writes and records the
    result in the undo history. Both clamp the scale.
    """

    def __init__(self, store: Store):
        self._store = store

    def read(self) -> Transform:
        return self._store.state.transform

    def preview(self, transform: Transform) -> None:
        self._store.dispatch_sync(PreviewTransform(transform))

    def commit(self, transform: Transform) -> None:
        self._store.dispatch_sync(CommitTransform(transform))

    def undo(self) -> None:
        self._store.dispatch_sync(Undo())

    def redo(self) -> None:
        self._store.dispatch_sync(Redo())

    @property
    def can_undo(self) -> bool:
        return self._store.state.can_undo

    @property
    def can_redo(self) -> bool:
        return self._store.state.can_redo

    @property
    def maintain_aspect_ratio(self) -> bool:
        return self._store.state.maintain_aspect_ratio

    def toggle_aspect_ratio(self) -> None:
        self._store.dispatch_sync(ToggleAspectRatio())
