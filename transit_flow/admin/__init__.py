from .segment_editor import SegmentEditor, SegmentMode, EditorState

__all__ = ["SegmentEditor", "SegmentMode", "EditorState"]
