"""termtimer: a terminal countdown timer with desktop notifications."""

import logging

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())
