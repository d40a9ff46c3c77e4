"""
Validated option and output models for the loader and command-line tools.
"""

from pydantic import BaseModel, field_validator, ConfigDict

from .config import (
    MAX_SINGLE_READ,
    VALID_UNICODE_ERRORS,
    W2V_BUFFER_SIZE,
    W2V_MAX_WORD_BYTES,
    W2V_MIN_WORD_LENGTH,
    W2V_UNICODE_ERRORS,
    get_buffer_size,
    get_max_word_bytes,
    get_min_word_length,
    get_unicode_errors,
)


class LoaderOptions(BaseModel):
    model_config = ConfigDict(frozen=True, validate_default=True)

    buffer_size: int = W2V_BUFFER_SIZE
    max_word_bytes: int = W2V_MAX_WORD_BYTES
    min_word_length: int = W2V_MIN_WORD_LENGTH
    unicode_errors: str = W2V_UNICODE_ERRORS

    @field_validator('buffer_size')
    @classmethod
    def buffer_size_must_be_positive(cls, v):
        if v < 1:
            raise ValueError('buffer_size must be >= 1')
        return min(v, MAX_SINGLE_READ)

    @field_validator('max_word_bytes')
    @classmethod
    def max_word_bytes_must_be_positive(cls, v):
        if v < 1:
            raise ValueError('max_word_bytes must be >= 1')
        return v

    @field_validator('min_word_length')
    @classmethod
    def min_word_length_must_be_positive(cls, v):
        if v < 1:
            raise ValueError('min_word_length must be >= 1')
        return v

    @field_validator('unicode_errors')
    @classmethod
    def unicode_errors_must_be_valid(cls, v):
        if v not in VALID_UNICODE_ERRORS:
            raise ValueError(f'unicode_errors must be one of: {VALID_UNICODE_ERRORS}')
        return v

    @classmethod
    def from_env(cls) -> 'LoaderOptions':
        """Build options from the W2V_* environment variables."""
        return cls(
            buffer_size=get_buffer_size(),
            max_word_bytes=get_max_word_bytes(),
            min_word_length=get_min_word_length(),
            unicode_errors=get_unicode_errors(),
        )


class HitModel(BaseModel):
    word: str
    score: float
