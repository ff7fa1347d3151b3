from __future__ import annotations

import logging

import pytest

from neurite_paths import PointBuffer
from neurite_paths.config import (
    bool_env,
    config,
    configure,
    float_env,
    int_env,
    set_log_level,
    use,
)


def test_bool_int_float_env_roundtrip(monkeypatch):
    monkeypatch.setenv("TBOOL", "true")
    assert bool_env("TBOOL", False) is True
    monkeypatch.setenv("TBOOL", "0")
    assert bool_env("TBOOL", True) is False
    monkeypatch.setenv("TINT", "42")
    assert int_env("TINT", 0) == 42
    monkeypatch.setenv("TFLOAT", "1.5")
    assert float_env("TFLOAT", 0.0) == 1.5


def test_bool_env_rejects_garbage(monkeypatch):
    monkeypatch.setenv("TBOOL", "maybe")
    with pytest.raises(ValueError):
        bool_env("TBOOL", False)


def test_bool_env_default_when_unset(monkeypatch):
    monkeypatch.delenv("TBOOL_UNSET", raising=False)
    assert bool_env("TBOOL_UNSET", True) is True


def test_use_context_restores_settings():
    prev = config.settings
    with use(reserve=4, growth_factor=1.5) as tmp:
        assert tmp.reserve == 4
        assert config.growth_factor == 1.5
    assert config.settings == prev


def test_use_restores_after_exception():
    prev = config.settings
    with pytest.raises(RuntimeError):
        with use(reserve=7):
            raise RuntimeError("boom")
    assert config.settings == prev


def test_configure_rejects_invalid_values_and_keeps_state():
    prev = config.settings
    with pytest.raises(ValueError):
        configure(growth_factor=1.0)
    with pytest.raises(ValueError):
        configure(reserve=0)
    with pytest.raises(ValueError):
        configure(not_a_setting=3)
    assert config.settings == prev


def test_reserve_and_growth_are_applied_to_new_buffers():
    with use(reserve=5, growth_factor=1.2):
        buf = PointBuffer()
        assert buf.capacity == 5
        for i in range(6):
            buf.append(float(i), 0.0, 0.0)
        # int(5 * 1.2 + 1) == 7
        assert buf.capacity == 7
        assert buf.size == 6


def test_set_log_level_accepts_names_and_ints():
    logger = logging.getLogger("neurite_paths")
    prev = logger.level
    try:
        set_log_level("debug")
        assert logger.level == logging.DEBUG
        set_log_level(logging.ERROR)
        assert logger.level == logging.ERROR
        set_log_level("not-a-level")
        assert logger.level == logging.WARNING
    finally:
        logger.setLevel(prev)
