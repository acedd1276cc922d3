from .memory_trigger_channel import MemoryTriggerChannel

__all__ = ['MemoryTriggerChannel']
