"""Brand hunting orchestration utilities.

This module owns the generate -> probe -> fetch -> aggregate flow. The CLI
delegates all aggregation concerns to these helpers, which keeps
side-effects (printing, progress) out of the core logic and makes the loop
reusable from tests or other entry-points.

State is explicit: each pass receives a `RunState` and returns a new one.
Passes never overlap, so no locking is needed.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Callable, Sequence

from core.domain.models import AvailabilityRecord
from core.interfaces import DomainProber, NameGenerator, RegistrationFetcher
from core.services.availability import aggregate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RunState:
    """AcceptedSet plus pass counter, owned by the run loop."""

    accepted: tuple[AvailabilityRecord, ...] = ()
    passes: int = 0

    def extend(self, records: Sequence[AvailabilityRecord], *, dedupe: bool = False) -> "RunState":
        """Append accepted records (append-only, never shrinks)."""

        accepted = list(self.accepted)
        if dedupe:
            seen = {r.name.strip().lower() for r in accepted}
            for record in records:
                key = record.name.strip().lower()
                if key in seen:
                    logger.info("Skipping duplicate candidate %r", record.name)
                    continue
                seen.add(key)
                accepted.append(record)
        else:
            accepted.extend(records)
        return RunState(accepted=tuple(accepted), passes=self.passes)

    def next_pass(self) -> "RunState":
        return RunState(accepted=self.accepted, passes=self.passes + 1)


@dataclass
class RunHooks:
    """Optional callbacks for UI layers (progress reporting)."""

    pass_started: Callable[[int], None] | None = None
    candidates_generated: Callable[[int, list[str]], None] | None = None
    pass_finished: Callable[["PassResult"], None] | None = None


@dataclass
class PassResult:
    """Output of a single pass."""

    state: RunState
    records: list[AvailabilityRecord]
    accepted: list[AvailabilityRecord] = field(default_factory=list)

    @property
    def added(self) -> int:
        return len(self.accepted)


async def verify_candidates(
    *,
    names: Sequence[str],
    prober: DomainProber,
    fetcher: RegistrationFetcher,
    tld: str = ".com",
) -> list[AvailabilityRecord]:
    """Run both verification stages over `names` and return complete records.

    Two barriers: every DNS probe finishes before any WHOIS result is
    recorded, so each record sees DNS-set before WHOIS-set.
    """

    records = [AvailabilityRecord.for_candidate(name, tld=tld) for name in names]

    dns_results = await asyncio.gather(*(prober.probe(r.name) for r in records))
    for record, available in zip(records, dns_results):
        record.mark_dns(available)

    whois_results = await asyncio.gather(*(fetcher.fetch_registration(r.domain) for r in records))
    for record, info in zip(records, whois_results):
        record.mark_registration(info)

    return records


async def run_pass(
    *,
    state: RunState,
    generator: NameGenerator,
    prober: DomainProber,
    fetcher: RegistrationFetcher,
    tld: str = ".com",
    dedupe: bool = False,
    hooks: RunHooks | None = None,
) -> PassResult:
    hooks = hooks or RunHooks()
    state = state.next_pass()
    if hooks.pass_started:
        hooks.pass_started(state.passes)

    names = await generator.generate()
    if hooks.candidates_generated:
        hooks.candidates_generated(state.passes, names)

    records = await verify_candidates(names=names, prober=prober, fetcher=fetcher, tld=tld)
    accepted = aggregate(records)
    before = len(state.accepted)
    state = state.extend(accepted, dedupe=dedupe)
    added = list(state.accepted[before:])

    logger.info(
        "Pass %d: %d candidates, %d accepted, %d total",
        state.passes,
        len(records),
        len(added),
        len(state.accepted),
    )
    result = PassResult(state=state, records=records, accepted=added)
    if hooks.pass_finished:
        hooks.pass_finished(result)
    return result


async def run_until_threshold(
    *,
    generator: NameGenerator,
    prober: DomainProber,
    fetcher: RegistrationFetcher,
    target_count: int = 20,
    tld: str = ".com",
    dedupe: bool = False,
    max_passes: int | None = None,
    state: RunState | None = None,
    hooks: RunHooks | None = None,
) -> RunState:
    """Repeat passes until the AcceptedSet reaches `target_count`.

    Unbounded unless `max_passes` is given. `MaxRetriesExceeded` from the
    generator is not caught here.
    """

    state = state or RunState()
    while len(state.accepted) < target_count:
        if max_passes is not None and state.passes >= max_passes:
            logger.warning(
                "Stopping after %d passes with %d/%d accepted names",
                state.passes,
                len(state.accepted),
                target_count,
            )
            break
        result = await run_pass(
            state=state,
            generator=generator,
            prober=prober,
            fetcher=fetcher,
            tld=tld,
            dedupe=dedupe,
            hooks=hooks,
        )
        state = result.state
    return state
