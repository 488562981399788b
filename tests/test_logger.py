import logging
from logging.handlers import RotatingFileHandler

from utils.logger import LOGGER_NAME, get_logger, setup_api_logger


def _file_handlers(logger, path):
    return [h for h in logger.handlers
            if isinstance(h, RotatingFileHandler) and h.baseFilename == str(path)]


def test_setup_is_idempotent_per_path(tmp_path):
    log_file = tmp_path / "nested" / "api.log"

    logger = setup_api_logger(str(log_file))
    setup_api_logger(str(log_file))

    assert logger.name == LOGGER_NAME
    assert log_file.parent.is_dir()
    assert len(_file_handlers(logger, log_file)) == 1


def test_area_loggers_write_through_api_log(tmp_path):
    log_file = tmp_path / "api.log"
    root = setup_api_logger(str(log_file))

    social = get_logger("social")
    social.info("User alice followed bob")
    for handler in _file_handlers(root, log_file):
        handler.flush()

    assert social.name == "paddock.api.social"
    content = log_file.read_text(encoding="utf-8")
    assert "[INFO] paddock.api.social: User alice followed bob" in content


def test_debug_is_filtered_at_info_level(tmp_path):
    log_file = tmp_path / "api.log"
    root = setup_api_logger(str(log_file), level=logging.INFO)

    get_logger("reviews").debug("noise")
    for handler in _file_handlers(root, log_file):
        handler.flush()

    assert "noise" not in log_file.read_text(encoding="utf-8")
