"""
electricityMap Common Library
Shared functionality for the electricityMap web services.
"""

from .langcodes import primary, split_facebook_locale, parse_accept_language
from .numbers import get_ratio_percent, tons_per_hour_to_grams_per_minute
from .logs import get_logger
from .version import read_version

__all__ = [
    'primary', 'split_facebook_locale', 'parse_accept_language',
    'get_ratio_percent', 'tons_per_hour_to_grams_per_minute',
    'get_logger',
    'read_version'
]
