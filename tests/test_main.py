from unittest.mock import patch

import pytest
from weather_query import main


@patch("weather_query.main.setup_logging")
@patch("weather_query.main.uvicorn.run")
def test_main_runs_uvicorn(mock_run, mock_setup_logging) -> None:
    main.main()

    mock_setup_logging.assert_called_once()
    args, kwargs = mock_run.call_args
    assert args[0] == "weather_query.app:app"
    assert kwargs["host"] == main.settings.host
    assert kwargs["port"] == main.settings.port


@patch("weather_query.main.setup_logging")
@patch("weather_query.main.uvicorn.run", side_effect=OSError("Address already in use"))
def test_main_reraises_crash(mock_run, mock_setup_logging) -> None:
    with pytest.raises(OSError, match="Address already in use"):
        main.main()
