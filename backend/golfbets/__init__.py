"""Golf side-bet calculation and settlement engine."""
