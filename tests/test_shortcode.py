"""Tests for short code generation."""

import random
import string

from tinylink.shortcode import ShortCodeGenerator


class TestShortCodeGenerator:
    """Test short code generation."""
    
    def test_generate_default_length(self):
        """Generated codes default to six characters."""
        generator = ShortCodeGenerator()
        
        code = generator.generate()
        assert len(code) == 6
        assert generator.is_valid_format(code)
    
    def test_generate_custom_length(self):
        """Test random code with custom length."""
        generator = ShortCodeGenerator(default_length=6)
        
        code = generator.generate(length=7)
        assert len(code) == 7
        assert generator.is_valid_format(code)
    
    def test_alphabet_is_base62(self):
        assert len(ShortCodeGenerator.BASE62_CHARS) == 62
        assert set(ShortCodeGenerator.BASE62_CHARS) == set(string.ascii_letters + string.digits)
    
    def test_generate_uses_injected_entropy(self):
        """Same seed, same codes."""
        first = ShortCodeGenerator(rng=random.Random(42))
        second = ShortCodeGenerator(rng=random.Random(42))
        
        assert [first.generate() for _ in range(5)] == [second.generate() for _ in range(5)]
    
    def test_generate_covers_alphabet(self):
        generator = ShortCodeGenerator(rng=random.Random(7))
        
        seen = set("".join(generator.generate(8) for _ in range(2000)))
        assert seen == set(ShortCodeGenerator.BASE62_CHARS)
    
    def test_is_valid_format(self):
        """Test format validation."""
        assert ShortCodeGenerator.is_valid_format("Ab3xY9")
        assert ShortCodeGenerator.is_valid_format("abcdefg")
        assert ShortCodeGenerator.is_valid_format("ABCD1234")
        
        # Too short / too long
        assert not ShortCodeGenerator.is_valid_format("AB12")
        assert not ShortCodeGenerator.is_valid_format("ABCDE")
        assert not ShortCodeGenerator.is_valid_format("ABCDEFGHI")
        
        # Invalid characters
        assert not ShortCodeGenerator.is_valid_format("abc-123")
        assert not ShortCodeGenerator.is_valid_format("abc_123")
        assert not ShortCodeGenerator.is_valid_format("abc 123")
        assert not ShortCodeGenerator.is_valid_format("Ab3xY9\n")
        assert not ShortCodeGenerator.is_valid_format("ÄbcdeF")
        
        assert not ShortCodeGenerator.is_valid_format("")
        assert not ShortCodeGenerator.is_valid_format(None)
        assert not ShortCodeGenerator.is_valid_format(123456)
