import logging

_logger = logging.getLogger()
_logger.setLevel(logging.INFO)
