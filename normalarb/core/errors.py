# normalarb/core/errors.py


class NormalArbError(Exception):
    """Base class for every error raised by normalarb."""
    pass


class DomainError(NormalArbError, ValueError):
    """Raised when a math primitive is evaluated outside its domain,
    e.g. ln of a non-positive value or Φ⁻¹ outside (0, 1)."""
    pass


class FixedPointOverflowError(NormalArbError, OverflowError):
    """Raised when a cast leaves the representable 256-bit range."""
    pass


class InvalidGammaError(NormalArbError, ZeroDivisionError):
    """Raised when the fee multiplier gamma is zero or out of range."""
    pass


class PoolUnavailableError(NormalArbError):
    """Raised when a pool reports zero liquidity or zero reserves."""
    pass


class ZeroOutputError(NormalArbError):
    """Raised when settlement quotes no output for a sized trade."""
    pass


class InvalidReportedPriceError(NormalArbError, ValueError):
    """Raised when a reported price is not strictly positive."""
    pass


class TradeFailedError(NormalArbError):
    """Raised when the hedge trade on the reference exchange fails."""
    pass
