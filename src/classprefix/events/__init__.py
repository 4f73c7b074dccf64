from classprefix.events.bus import EventBus
from classprefix.events.types import FileProcessed, RunCompleted, RunStarted

__all__ = ["EventBus", "FileProcessed", "RunCompleted", "RunStarted"]
