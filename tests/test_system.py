"""Tests for CriticalSystemError."""

from errorkit.taxonomy import CriticalSystemError, ErrorCategory, MemoryInfo, Severity


class TestCriticalSystemError:
    def test_always_critical(self):
        error = CriticalSystemError("disk controller failure")
        assert error.severity is Severity.CRITICAL
        assert error.category is ErrorCategory.SYSTEM_ERROR
        assert error.error_code == "SYSTEM_ERROR"

    def test_default_message(self):
        assert CriticalSystemError().message == "System error occurred"

    def test_message_from_cause(self):
        error = CriticalSystemError.from_exception(MemoryError("heap exhausted"))
        assert error.message == "heap exhausted"
        assert error.error_type == "MemoryError"

    def test_error_type_without_cause(self):
        assert CriticalSystemError("x").error_type is None

    def test_out_of_memory(self):
        error = CriticalSystemError.out_of_memory("image-cache", 1024)
        assert error.message == "Out of memory error"
        assert error.context.get("component") == "image-cache"
        assert error.context.get("memoryRequested") == 1024
        assert error.context.get_metadata("errorType") == "memory"
        assert error.severity is Severity.CRITICAL

    def test_with_memory_info(self):
        info = MemoryInfo(total_memory=100, free_memory=1, max_memory=128)
        error = CriticalSystemError.with_memory_info(info, MemoryError())
        assert error.context.get("freeMemory") == 1
        assert error.context.get("maxMemory") == 128
        assert error.message == "Out of memory error"

    def test_stack_overflow(self):
        cause = RecursionError("maximum recursion depth exceeded")
        error = CriticalSystemError.stack_overflow("walk", 1000, cause)
        assert error.context.get("methodName") == "walk"
        assert error.context.get("stackDepth") == 1000
        assert error.context.get_metadata("errorType") == "stack"
        assert error.error_type == "RecursionError"

    def test_thread_death(self):
        error = CriticalSystemError.thread_death("worker-1")
        assert error.message == "Thread worker-1 terminated"
        assert error.context.get_metadata("errorType") == "thread"

    def test_class_loading(self):
        error = CriticalSystemError.class_loading("plugins.export", ImportError("no module"))
        assert error.context.get("className") == "plugins.export"
        assert error.message == "no module"
        assert error.error_type == "ImportError"
