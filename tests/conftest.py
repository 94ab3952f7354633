"""Test configuration and fixtures for CHIP-8 emulator tests."""

import pytest
import jax.numpy as jnp
from chipax import create_state


@pytest.fixture
def fresh_state():
    """Provide a fresh emulator state for each test."""
    return create_state()


@pytest.fixture
def modern_state():
    """Provide a fresh state with in-place shifts."""
    return create_state(modern_shift=True)


@pytest.fixture
def legacy_state():
    """Provide a fresh state with shifts that copy VY first."""
    return create_state(modern_shift=False)


def setup_sprite_in_memory(state, address, sprite_bytes):
    """Helper to put sprite data in memory."""
    return state.replace(
        memory=state.memory.at[address:address+len(sprite_bytes)].set(
            jnp.array(sprite_bytes, dtype=jnp.uint8)
        )
    )


def program(*words):
    """Encode instruction words as big-endian program bytes."""
    return b"".join(word.to_bytes(2, "big") for word in words)
