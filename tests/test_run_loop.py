from unittest.mock import MagicMock

import pytest

from core.domain.errors import MaxRetriesExceeded
from core.services.run_loop import RunHooks, RunState, run_pass, run_until_threshold, verify_candidates
from tests.fakes import FakeFetcher, FakeGenerator, FakeProber, GatedDnsStage, GatedWhoisStage

TEN = ["Alpha", "Bravo", "Charlie", "Delta", "Echo", "Foxtrot", "Golf", "Hotel", "India", "Juliet"]


@pytest.mark.asyncio
async def test_pass_appends_accepted_in_candidate_order():
    generator = FakeGenerator([TEN])
    # Five have no A record, but two of those still show a registrar in WHOIS.
    prober = FakeProber(["Bravo", "Delta", "Foxtrot", "Hotel", "Juliet"])
    fetcher = FakeFetcher({"delta.com": "Example Corp", "hotel.com": "Other Registrar"})

    result = await run_pass(state=RunState(), generator=generator, prober=prober, fetcher=fetcher)

    assert [r.name for r in result.accepted] == ["Bravo", "Foxtrot", "Juliet"]
    assert [r.name for r in result.state.accepted] == ["Bravo", "Foxtrot", "Juliet"]
    assert result.added == 3
    assert len(result.records) == 10
    assert result.state.passes == 1
    assert all(r.is_complete for r in result.records)


@pytest.mark.asyncio
async def test_pass_does_not_mutate_previous_state():
    initial = RunState()
    result = await run_pass(
        state=initial,
        generator=FakeGenerator([["Acme"]]),
        prober=FakeProber(["Acme"]),
        fetcher=FakeFetcher(),
    )

    assert initial.accepted == ()
    assert len(result.state.accepted) == 1


@pytest.mark.asyncio
async def test_verify_candidates_probes_and_fetches_every_name():
    prober = FakeProber([])
    fetcher = FakeFetcher()

    records = await verify_candidates(names=["Acme", "Zeta"], prober=prober, fetcher=fetcher, tld=".io")

    assert sorted(prober.probed) == ["Acme", "Zeta"]
    assert sorted(fetcher.fetched) == ["acme.io", "zeta.io"]
    assert [r.domain for r in records] == ["acme.io", "zeta.io"]


@pytest.mark.asyncio
async def test_verify_candidates_runs_each_stage_concurrently():
    # Each call blocks until all of its stage's calls are in flight, so a
    # sequential implementation times out.
    events = []
    names = TEN[:5]

    records = await verify_candidates(
        names=names,
        prober=GatedDnsStage(len(names), events),
        fetcher=GatedWhoisStage(len(names), events),
        tld=".com",
    )

    assert [stage for stage, _ in events] == ["dns"] * 5 + ["whois"] * 5
    assert sorted(key for stage, key in events if stage == "whois") == sorted(f"{n.lower()}.com" for n in names)
    assert all(r.is_complete and r.dns_available for r in records)


@pytest.mark.asyncio
async def test_loops_until_threshold():
    batches = [["A1", "A2"], ["B1", "B2"], ["C1", "C2"]]
    generator = FakeGenerator(batches)
    prober = FakeProber(["A1", "B1", "B2", "C1", "C2"])

    state = await run_until_threshold(
        generator=generator, prober=prober, fetcher=FakeFetcher(), target_count=3
    )

    assert generator.calls == 2
    assert state.passes == 2
    assert [r.name for r in state.accepted] == ["A1", "B1", "B2"]


@pytest.mark.asyncio
async def test_threshold_already_met_runs_no_pass():
    generator = FakeGenerator([])
    seed = await run_pass(
        state=RunState(),
        generator=FakeGenerator([["Acme"]]),
        prober=FakeProber(["Acme"]),
        fetcher=FakeFetcher(),
    )

    state = await run_until_threshold(
        generator=generator, prober=FakeProber([]), fetcher=FakeFetcher(), target_count=1, state=seed.state
    )

    assert generator.calls == 0
    assert state == seed.state


@pytest.mark.asyncio
async def test_duplicates_are_kept_by_default():
    generator = FakeGenerator([["Acme", "acme"], ["Acme"]])

    state = await run_until_threshold(
        generator=generator, prober=FakeProber(["Acme", "acme"]), fetcher=FakeFetcher(), target_count=3
    )

    assert [r.name for r in state.accepted] == ["Acme", "acme", "Acme"]


@pytest.mark.asyncio
async def test_dedupe_skips_names_already_accepted():
    generator = FakeGenerator([["Acme", "acme"], ["Acme", "Zeta"]])

    state = await run_until_threshold(
        generator=generator,
        prober=FakeProber(["Acme", "acme", "Zeta"]),
        fetcher=FakeFetcher(),
        target_count=2,
        dedupe=True,
    )

    assert [r.name for r in state.accepted] == ["Acme", "Zeta"]
    assert state.passes == 2


@pytest.mark.asyncio
async def test_max_passes_stops_early():
    generator = FakeGenerator([["A"], ["B"], ["C"]])

    state = await run_until_threshold(
        generator=generator, prober=FakeProber([]), fetcher=FakeFetcher(), target_count=5, max_passes=2
    )

    assert state.passes == 2
    assert state.accepted == ()


@pytest.mark.asyncio
async def test_max_retries_propagates():
    class FailingGenerator:
        async def generate(self):
            raise MaxRetriesExceeded(10)

    with pytest.raises(MaxRetriesExceeded):
        await run_until_threshold(generator=FailingGenerator(), prober=FakeProber([]), fetcher=FakeFetcher())


@pytest.mark.asyncio
async def test_hooks_are_called():
    hooks = RunHooks(pass_started=MagicMock(), candidates_generated=MagicMock(), pass_finished=MagicMock())

    result = await run_pass(
        state=RunState(),
        generator=FakeGenerator([["Acme"]]),
        prober=FakeProber(["Acme"]),
        fetcher=FakeFetcher(),
        hooks=hooks,
    )

    hooks.pass_started.assert_called_once_with(1)
    hooks.candidates_generated.assert_called_once_with(1, ["Acme"])
    hooks.pass_finished.assert_called_once_with(result)
