# -*- coding: utf-8 -*-
"""Top-level package for Weather Glance."""
import logging

from weather_glance import config

__author__ = """Michael Dereszynski"""
__email__ = 'mlderes@hotmail.com'
__version__ = '0.2.0'

_logging_configured = False


def configure_logging(filename=None):
    """ Send debug messages to the log file and INFO messages to the console

    :param filename: log file to write to, defaults to the configured log file
    """
    global _logging_configured
    if _logging_configured:
        return
    logging.basicConfig(level=logging.DEBUG,
                        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
                        filename=filename or config.log_filename,
                        filemode='w')
    ch = logging.StreamHandler()
    ch.setLevel(logging.INFO)
    # create formatter and add it to the handlers
    formatter = logging.Formatter('%(levelname)s - %(message)s')
    ch.setFormatter(formatter)
    # add the handlers to the logger
    logging.getLogger('').addHandler(ch)
    _logging_configured = True
