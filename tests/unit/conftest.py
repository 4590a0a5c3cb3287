import pytest
from unittest.mock import AsyncMock, MagicMock


@pytest.fixture
def mock_uow():
    """Mock unit of work; leaving the context never swallows exceptions"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()
    return uow


@pytest.fixture
def mock_resolver():
    """Mock AccountResolver"""
    return MagicMock()


@pytest.fixture
def mock_processor():
    """Mock TransactionProcessor with no idempotent replay by default"""
    processor = MagicMock()
    processor.find_replay = AsyncMock(return_value=None)
    return processor
