from .events import EventPublisher, FileEvent, FileEventKind

__all__ = ["EventPublisher", "FileEvent", "FileEventKind"]
