"""Envelope status classification"""

from envelope_gateway.domain.models import EnvelopeStatus
from envelope_gateway.domain.policy import DEFAULT_POLICY, PredictionPolicy


def classify_status(
    gap_cents: int,
    days_until_due: int,
    policy: PredictionPolicy = DEFAULT_POLICY,
) -> EnvelopeStatus:
    """
    Map a funding gap and runway to a status. First matching rule wins:

    - gap <= 0: overfunded if the surplus exceeds $10, else on_track
    - gap > 0 with more than 14 days left: behind
    - otherwise: critical

    Envelopes without a due date carry 999 days and never reach critical.
    """
    if gap_cents <= 0:
        if gap_cents < -policy.overfunded_threshold_cents:
            return EnvelopeStatus.OVERFUNDED
        return EnvelopeStatus.ON_TRACK

    if days_until_due > policy.critical_runway_days:
        return EnvelopeStatus.BEHIND

    return EnvelopeStatus.CRITICAL
