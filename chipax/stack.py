"""CHIP-8 stack operations.

Slots hold full 16-bit return addresses. A call made from the last word of
memory returns to 0x1000, which the next fetch reports as out of bounds.
"""

import jax.numpy as jnp
from chipax.constants import STACK_SIZE
from chipax.state import StackState


def is_full(stack: StackState) -> jnp.ndarray:
    """True when another push would overflow."""
    return stack.pointer >= STACK_SIZE


def is_empty(stack: StackState) -> jnp.ndarray:
    """True when a pop would underflow."""
    return stack.pointer == 0


def push(stack: StackState, address: jnp.ndarray) -> StackState:
    """Push a return address. Callers check ``is_full`` first."""
    new_data = stack.data.at[stack.pointer].set(jnp.astype(address, jnp.uint16))
    return stack.replace(data=new_data, pointer=stack.pointer + 1)


def pop(stack: StackState) -> tuple[StackState, jnp.ndarray]:
    """Pop the most recent return address. Callers check ``is_empty`` first."""
    top = stack.pointer - 1
    return stack.replace(data=stack.data.at[top].set(0), pointer=top), stack.data[top]
