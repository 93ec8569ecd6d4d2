from .normalize import finite_pairs, finite_values, is_categorical_input, normalize_categorical, normalize_dataset

__all__ = [
    "finite_pairs",
    "finite_values",
    "is_categorical_input",
    "normalize_categorical",
    "normalize_dataset",
]
