"""
Registration gap detection and collectability.

A registration gap is missing metadata (ISWC, PRO registration, splits,
publishers, or thin metadata overall) that lets royalties leak before they
reach the rights holder. Collectability is the share of the base pipeline
still expected to arrive given those gaps.
"""

from typing import List

from ..config import PipelineConfig
from ..models import RegistrationGap, SongMeta, clamp


def is_verified(song: SongMeta, config: PipelineConfig) -> bool:
    """True when the song's registrations were confirmed with a PRO."""
    return song.status in config.verified_statuses


def detect_registration_gaps(song: SongMeta, config: PipelineConfig) -> List[RegistrationGap]:
    """
    List the registration gaps for a song.

    Args:
        song: Song metadata; absent fields count as gaps
        config: Pipeline policy (supplies the completeness threshold)

    Returns:
        Gaps in a stable order
    """
    gaps: List[RegistrationGap] = []
    if not song.has_iswc:
        gaps.append(RegistrationGap.MISSING_ISWC)
    if not song.has_pro_registrations:
        gaps.append(RegistrationGap.MISSING_PRO)
    if not song.has_splits:
        gaps.append(RegistrationGap.MISSING_SPLITS)
    if not song.has_publishers:
        gaps.append(RegistrationGap.MISSING_PUBLISHERS)
    if song.completeness < config.completeness_threshold:
        gaps.append(RegistrationGap.INCOMPLETE_METADATA)
    return gaps


def collectability_factor(song: SongMeta, config: PipelineConfig) -> float:
    """
    Fraction of a song's base pipeline expected to be collected.

    Each gap multiplies in its discount. PRO-verified songs get a boost
    capped at full collection, while never-verified songs without an ISWC
    take an extra leakage discount. The result never drops below the
    configured floor: an unregistered work can still earn.

    Args:
        song: Song metadata
        config: Pipeline policy

    Returns:
        Collectability in [collectability_floor, 1]
    """
    discounts = config.gap_discounts
    factors = {
        RegistrationGap.MISSING_PRO: discounts.missing_pro,
        RegistrationGap.MISSING_ISWC: discounts.missing_iswc,
        RegistrationGap.MISSING_SPLITS: discounts.missing_splits,
        RegistrationGap.MISSING_PUBLISHERS: discounts.missing_publishers,
        RegistrationGap.INCOMPLETE_METADATA: discounts.incomplete_metadata,
    }

    p = 1.0
    for gap in detect_registration_gaps(song, config):
        p *= factors[gap]

    if is_verified(song, config):
        p = min(1.0, p * discounts.verified_boost)

    if song.status in config.unverified_statuses and not song.has_iswc:
        p *= discounts.unverified_without_iswc

    return clamp(p, config.collectability_floor, 1.0)
