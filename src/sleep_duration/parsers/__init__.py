"""Parsers that turn raw bedtime/wake-up expressions into clock triples."""

from .clock import TIME_PATTERN, TimeExpression, parse_time_input

__all__ = ["TIME_PATTERN", "TimeExpression", "parse_time_input"]
