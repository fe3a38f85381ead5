"""zfounders - access policy and messaging core for a founder/investor video network."""

__version__ = "1.0.0"
