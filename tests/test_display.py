"""Tests for display operations (DXYN)."""

import jax.numpy as jnp
from chipax import execute
from conftest import setup_sprite_in_memory


class TestBasicSprites:
    """Test basic sprite drawing."""

    def test_basic_sprite_draw(self, fresh_state):
        """Test basic sprite drawing without collision."""
        state = fresh_state

        # Simple 2x2 box sprite
        sprite = [0xC0, 0xC0]  # 11000000, 11000000
        state = setup_sprite_in_memory(state, 0x300, sprite)

        state = execute(state, 0x600A)  # V0 = 10
        state = execute(state, 0x6105)  # V1 = 5
        state = execute(state, 0xA300)  # I = 0x300

        # Draw sprite: D012 (draw at V0,V1 with height 2)
        state = execute(state, 0xD012)

        assert state.display[10, 5] == 1  # Top-left
        assert state.display[11, 5] == 1  # Top-right
        assert state.display[10, 6] == 1  # Bottom-left
        assert state.display[11, 6] == 1  # Bottom-right
        assert state.display[12, 5] == 0  # Outside sprite
        assert jnp.sum(state.display) == 4

        # No collision should occur
        assert state.V[15] == 0

    def test_collision_detection(self, fresh_state):
        """Test collision flag when sprite overlaps existing pixels."""
        state = fresh_state

        sprite = [0x80]  # 10000000
        state = setup_sprite_in_memory(state, 0x400, sprite)

        state = execute(state, 0x6014)  # V0 = 20
        state = execute(state, 0x610A)  # V1 = 10
        state = execute(state, 0xA400)  # I = 0x400

        state = execute(state, 0xD011)
        assert state.display[20, 10] == 1
        assert state.V[15] == 0

        state = execute(state, 0xD011)
        assert state.display[20, 10] == 0  # Pixel erased by XOR
        assert state.V[15] == 1  # Collision detected

    def test_xor_behavior(self, fresh_state):
        """Drawing a full-width row twice leaves the screen empty."""
        state = fresh_state

        sprite = [0xFF]
        state = setup_sprite_in_memory(state, 0x500, sprite)

        state = execute(state, 0x6008)  # V0 = 8
        state = execute(state, 0x610F)  # V1 = 15
        state = execute(state, 0xA500)  # I = 0x500

        state = execute(state, 0xD011)
        assert jnp.sum(state.display) == 8
        assert state.V[15] == 0

        state = execute(state, 0xD011)
        assert jnp.sum(state.display) == 0
        assert state.V[15] == 1

    def test_partial_overlap_keeps_other_pixels(self, fresh_state):
        """Only overlapping pixels flip off; the rest turn on."""
        state = setup_sprite_in_memory(fresh_state, 0x300, [0xF0, 0x0F])
        state = execute(state, 0xA300)

        state = execute(state, 0xD001)  # Draw 0xF0 at (0, 0)
        state = execute(state, 0xA301)
        state = execute(state, 0xD001)  # Draw 0x0F at (0, 0), no overlap
        assert state.V[15] == 0
        assert jnp.sum(state.display[:8, 0]) == 8

        state = execute(state, 0xA300)
        state = execute(state, 0xD001)  # 0xF0 again, erases left half
        assert state.V[15] == 1
        assert jnp.sum(state.display[:4, 0]) == 0
        assert jnp.sum(state.display[4:8, 0]) == 4


class TestScreenWrapping:
    """Test per-pixel wrapping at the screen edges."""

    def test_right_edge_wraps(self, fresh_state):
        """Pixels past column 63 continue at column 0."""
        state = setup_sprite_in_memory(fresh_state, 0x600, [0xFF])

        state = execute(state, 0x603C)  # V0 = 60
        state = execute(state, 0x6100)  # V1 = 0
        state = execute(state, 0xA600)  # I = 0x600

        state = execute(state, 0xD011)

        for x in (60, 61, 62, 63, 0, 1, 2, 3):
            assert state.display[x, 0] == 1
        assert state.display[4, 0] == 0
        assert jnp.sum(state.display) == 8

    def test_bottom_edge_wraps(self, fresh_state):
        """Rows past row 31 continue at row 0."""
        state = setup_sprite_in_memory(fresh_state, 0x700, [0x80, 0x80, 0x80])

        state = execute(state, 0x6000)  # V0 = 0
        state = execute(state, 0x611E)  # V1 = 30
        state = execute(state, 0xA700)  # I = 0x700

        state = execute(state, 0xD013)

        assert state.display[0, 30] == 1
        assert state.display[0, 31] == 1
        assert state.display[0, 0] == 1

    def test_corner_wraps_both_ways(self, fresh_state):
        """A sprite in the bottom-right corner spills into all four corners."""
        state = setup_sprite_in_memory(fresh_state, 0x300, [0xC0, 0xC0])

        state = execute(state, 0x603F)  # V0 = 63
        state = execute(state, 0x611F)  # V1 = 31
        state = execute(state, 0xA300)
        state = execute(state, 0xD012)

        assert state.display[63, 31] == 1
        assert state.display[0, 31] == 1
        assert state.display[63, 0] == 1
        assert state.display[0, 0] == 1

    def test_coordinate_wrapping(self, fresh_state):
        """Test coordinate wrapping with modulo."""
        state = setup_sprite_in_memory(fresh_state, 0x800, [0x80])

        state = execute(state, 0x6046)  # V0 = 70 (70 % 64 = 6)
        state = execute(state, 0x6125)  # V1 = 37 (37 % 32 = 5)
        state = execute(state, 0xA800)  # I = 0x800

        state = execute(state, 0xD011)

        assert state.display[6, 5] == 1

    def test_collision_on_wrapped_pixel(self, fresh_state):
        """Collisions are detected on wrapped pixels too."""
        state = fresh_state.replace(display=fresh_state.display.at[0, 0].set(True))
        state = setup_sprite_in_memory(state, 0x300, [0x01])

        state = execute(state, 0x6039)  # V0 = 57, bit 0 lands on x = 64 -> 0
        state = execute(state, 0xA300)
        state = execute(state, 0xD011)

        assert state.display[0, 0] == 0
        assert state.V[15] == 1


class TestSpriteVariations:
    """Test different sprite configurations."""

    def test_different_sprite_heights(self, fresh_state):
        """Test sprites with different N values."""
        sprite = [0x80, 0x40, 0x20, 0x10, 0x08]  # Diagonal line
        state = setup_sprite_in_memory(fresh_state, 0x900, sprite)

        state = execute(state, 0x600A)  # V0 = 10
        state = execute(state, 0x6108)  # V1 = 8
        state = execute(state, 0xA900)  # I = 0x900

        # Draw only first 3 rows (N=3)
        state = execute(state, 0xD013)

        assert state.display[10, 8] == 1  # Row 0: 0x80 → bit 7
        assert state.display[11, 9] == 1  # Row 1: 0x40 → bit 6
        assert state.display[12, 10] == 1  # Row 2: 0x20 → bit 5
        assert state.display[13, 11] == 0  # Row 3: not drawn (N=3)

    def test_zero_height_draws_nothing(self, fresh_state):
        """DXY0 draws no rows and clears VF."""
        state = setup_sprite_in_memory(fresh_state, 0x300, [0xFF])
        state = execute(state, 0x6F01)  # VF = 1
        state = execute(state, 0xA300)

        state = execute(state, 0xD010)

        assert jnp.sum(state.display) == 0
        assert state.V[15] == 0

    def test_full_height_sprite(self, fresh_state):
        """DXYF draws fifteen rows."""
        state = setup_sprite_in_memory(fresh_state, 0x300, [0x80] * 15)
        state = execute(state, 0xA300)

        state = execute(state, 0xD00F)

        assert jnp.sum(state.display) == 15
        assert state.display[0, 14] == 1
        assert state.display[0, 15] == 0

    def test_font_glyph_draw(self, fresh_state):
        """Drawing the glyph for 0 produces its 14-pixel outline."""
        state = execute(fresh_state, 0x6000)  # V0 = 0
        state = execute(state, 0xF029)  # I = glyph for V0
        state = execute(state, 0xD005)

        assert jnp.sum(state.display) == 14
        assert state.display[0, 0] == 1
        assert state.display[1, 1] == 0

    def test_vf_register_preservation(self, fresh_state):
        """Test that VF is properly set/cleared."""
        state = setup_sprite_in_memory(fresh_state, 0xB00, [0x80])

        state = execute(state, 0x6F01)  # VF = 1
        state = execute(state, 0x6005)  # V0 = 5
        state = execute(state, 0x6105)  # V1 = 5
        state = execute(state, 0xAB00)  # I = 0xB00
        state = execute(state, 0xD011)

        # VF should be cleared to 0 (no collision)
        assert state.V[15] == 0

    def test_coordinates_read_from_vf_before_reset(self, fresh_state):
        """DFF1 uses VF as coordinates before VF becomes the flag."""
        state = setup_sprite_in_memory(fresh_state, 0x300, [0x80])
        state = execute(state, 0x6F03)  # VF = 3
        state = execute(state, 0xA300)

        state = execute(state, 0xDFF1)

        assert state.display[3, 3] == 1
        assert state.V[15] == 0
