"""Kedro project settings."""

from price_wise.hooks import DataObservabilityHooks

HOOKS = (DataObservabilityHooks(),)
