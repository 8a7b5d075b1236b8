"""Building blocks for (S)NARK verifiers: prime fields, curves, polynomials, MSM, transcripts, configuration and PLONK polynomial layout."""

__version__ = "0.1.0"

__all__ = ["arithmetic", "config", "curve", "layout", "msm", "parallel", "poly", "transcript"]