"""Entry logging and aggregation core for the time-use tracker."""

__version__ = "0.1.0"
