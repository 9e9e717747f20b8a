import pytest
from unittest.mock import MagicMock

from src.logs.debug_log import format_object, log_function
from src.models.tag import Tag


class TestLogFunction:
    """log_function wraps sync and async callables alike"""

    def setup_method(self):
        self.logger = MagicMock()

    def test_sync_function(self):
        @log_function(self.logger)
        def add(a, b):
            return a + b

        assert add(2, 3) == 5
        self.logger.start_func.assert_called_once_with("add", {"a": 2, "b": 3})
        assert self.logger.end_func.call_args[0][:2] == ("add", 5)

    @pytest.mark.asyncio
    async def test_async_function_is_awaited(self):
        @log_function(self.logger)
        async def fetch(db, flashcard_id):
            return flashcard_id * 2

        assert await fetch(object(), flashcard_id=21) == 42
        # The session argument is left out of the log
        self.logger.start_func.assert_called_once_with("fetch", {"flashcard_id": 21})
        assert self.logger.end_func.call_args[0][:2] == ("fetch", 42)

    @pytest.mark.asyncio
    async def test_exception_is_logged_and_reraised(self):
        @log_function(self.logger)
        async def broken():
            raise ValueError("boom")

        with pytest.raises(ValueError):
            await broken()

        self.logger.log_exception.assert_called_once_with("Error in broken")
        self.logger.end_func.assert_not_called()


def test_format_object_shows_only_columns():
    assert format_object(Tag(id=1, name="x")) == str({"id": 1, "name": "x"})
