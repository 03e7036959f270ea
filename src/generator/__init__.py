"""Combination Generator module."""

from src.generator.combination_generator import (
    Combination,
    calculate_combinations_count,
    cartesian,
    choose,
    combination_key,
    generate_valid_combinations,
    group_label,
    label_groups,
    non_empty_groups,
    split_into_chunks,
)

__all__ = [
    "Combination",
    "group_label",
    "label_groups",
    "non_empty_groups",
    "choose",
    "cartesian",
    "generate_valid_combinations",
    "calculate_combinations_count",
    "combination_key",
    "split_into_chunks",
]
