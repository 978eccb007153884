"""
Referral incentive engine.

Application layer around the ``tiering`` package: models, repositories and
services that compute referral commissions and reward ladder progress.
Settings are not imported here, so the package can be used without a
configured environment.
"""

__version__ = "1.0.0"
