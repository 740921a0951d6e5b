"""Receipt text structuring: line classification, normalization, scoring, and fuzzy merging."""
