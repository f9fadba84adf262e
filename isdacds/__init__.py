"""ISDA standard model pricing of single name credit default swaps."""
