"""Service layer: stateful callers of the session lifecycle.

Services own the clock and policy and log every outcome.
All service methods return :class:`~checkinout.domain.outcome.Outcome`.
"""
