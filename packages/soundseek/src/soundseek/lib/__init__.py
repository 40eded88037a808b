"""Pure pipeline helpers: normalization, matching, classification, ranking."""
