"""Configuration module for wordcalc."""

from wordcalc.config.settings import CalcConfig, load_config

__all__ = ["CalcConfig", "load_config"]
