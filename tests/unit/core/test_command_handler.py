import pytest
from unittest.mock import MagicMock

from ghfetch.core.api_client import ApiClient
from ghfetch.core.command_handler import CommandHandler, EXIT_OK, EXIT_FAILURE
from ghfetch.domain.exceptions import HttpStatusError, LinkHeaderError, NetworkError
from ghfetch.domain.interfaces.cache import CacheStore
from ghfetch.domain.interfaces.user_interface import UserInterface

URL = "https://api.example.com/repos/o/r/issues"

@pytest.fixture
def mock_api_client():
    mock = MagicMock(spec=ApiClient)
    mock.transport = MagicMock()
    mock.transport.num_api_calls = 3
    return mock

@pytest.fixture
def mock_cache_store():
    return MagicMock(spec=CacheStore)

@pytest.fixture
def mock_ui():
    return MagicMock(spec=UserInterface)

@pytest.fixture
def command_handler(mock_api_client, mock_cache_store, mock_ui):
    """Fixture to create CommandHandler with mocked collaborators."""
    return CommandHandler(api_client=mock_api_client, cache_store=mock_cache_store, ui=mock_ui)

def test_handle_get(command_handler: CommandHandler, mock_api_client: MagicMock, mock_ui: MagicMock):
    """Test that handle_get requests the URL and displays the result."""
    mock_api_client.request.return_value = {"id": 1}

    assert command_handler.handle_get(URL, cache=True) == EXIT_OK

    mock_api_client.request.assert_called_once_with(URL, cache=True)
    mock_ui.display_data.assert_called_once_with({"id": 1})
    mock_ui.display_error.assert_not_called()

def test_handle_get_error(command_handler: CommandHandler, mock_api_client: MagicMock, mock_ui: MagicMock):
    """Test that transport failures are displayed and turn into a failing exit code."""
    error = HttpStatusError(URL, 500, "Internal Server Error")
    mock_api_client.request.side_effect = error

    assert command_handler.handle_get(URL) == EXIT_FAILURE

    mock_ui.display_error.assert_called_once_with(f"Request failed: {error}")
    mock_ui.display_data.assert_not_called()

def test_handle_paged(command_handler: CommandHandler, mock_api_client: MagicMock, mock_ui: MagicMock):
    """Test that handle_paged passes the page budget and reports a summary."""
    mock_api_client.request_paged.return_value = [{"id": 1}, {"id": 2}]

    assert command_handler.handle_paged(URL, pages=2, cache=False) == EXIT_OK

    mock_api_client.request_paged.assert_called_once_with(URL, pages=2, cache=False)
    mock_ui.display_data.assert_called_once_with([{"id": 1}, {"id": 2}])
    mock_ui.display_info.assert_called_once_with("2 item(s), 3 live call(s) in current window")

@pytest.mark.parametrize("error", [
    NetworkError(URL, "ConnectError: refused"),
    LinkHeaderError("garbage", "garbage"),
])
def test_handle_paged_error(command_handler: CommandHandler, mock_api_client: MagicMock, mock_ui: MagicMock, error):
    mock_api_client.request_paged.side_effect = error

    assert command_handler.handle_paged(URL) == EXIT_FAILURE

    mock_ui.display_error.assert_called_once_with(f"Paged request failed: {error}")

def test_unexpected_errors_propagate(command_handler: CommandHandler, mock_api_client: MagicMock):
    mock_api_client.request.side_effect = RuntimeError("bug")

    with pytest.raises(RuntimeError):
        command_handler.handle_get(URL)

def test_handle_clear_cache(command_handler: CommandHandler, mock_cache_store: MagicMock, mock_ui: MagicMock):
    assert command_handler.handle_clear_cache() == EXIT_OK

    mock_cache_store.clear.assert_called_once()
    mock_ui.display_info.assert_called_once_with("Cache cleared.")
