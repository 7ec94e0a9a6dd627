import logging

LOGGER_NAME = "pizza_delivery"
logger = logging.getLogger(LOGGER_NAME)
