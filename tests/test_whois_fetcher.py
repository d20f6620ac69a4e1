import logging
import time
from types import SimpleNamespace

import pytest
from whois.exceptions import PywhoisError

from adapters import whois_fetcher
from adapters.whois_fetcher import WhoisFetcher, parse_whois_text
from core.domain.models import RegistrationInfo

REGISTERED_TEXT = """\
   Domain Name: EXAMPLE.COM
   Registry Domain ID: 2336799_DOMAIN_COM-VRSN
   Registrar WHOIS Server: whois.iana.org
   Registrar URL: http://res-dom.iana.org
   Registrar: RESERVED-Internet Assigned Numbers Authority
   Registrar IANA ID: 376
Domain Name: example.com
Registrar Registration Expiration Date: 2025-08-13T04:00:00Z
>>> Last update of whois database: 2024-01-01T00:00:00Z <<<
"""


class TestParseWhoisText:
    def test_registrar_line(self):
        info = parse_whois_text("Registrar: Example Corp\n")
        assert info.registrar == "Example Corp"
        assert info.populated_fields() == ["registrar"]

    def test_all_three_fields(self):
        info = parse_whois_text(REGISTERED_TEXT)
        assert info.registrar == "RESERVED-Internet Assigned Numbers Authority"
        assert info.registrar_server == "whois.iana.org"
        assert info.expiration_date == "2025-08-13T04:00:00Z"

    def test_unrecognized_prefixes_are_ignored(self):
        info = parse_whois_text("Registrar IANA ID: 376\nRegistrar URL: http://x\nName Server: NS1.X\n")
        assert info == RegistrationInfo()
        assert not info.has_evidence

    def test_value_is_everything_after_first_separator(self):
        info = parse_whois_text("Registrar Registration Expiration Date: 2030-01-01 10: 00\r\n")
        assert info.expiration_date == "2030-01-01 10: 00"

    def test_empty_value_leaves_field_unset(self):
        assert parse_whois_text("Registrar: \n").registrar is None

    def test_no_match_text(self):
        assert parse_whois_text('No match for "ZZQXBRAND.COM".\n') == RegistrationInfo()


@pytest.mark.asyncio
async def test_fetch_parses_lookup_text(settings):
    fetcher = WhoisFetcher(settings, lookup=lambda domain: f"Registrar: Example Corp\nDomain: {domain}\n")

    info = await fetcher.fetch_registration("acme.com")

    assert info.registrar == "Example Corp"


@pytest.mark.asyncio
async def test_lookup_error_returns_empty_info(settings):
    def failing_lookup(domain):
        raise ConnectionResetError("whois server hung up")

    info = await WhoisFetcher(settings, lookup=failing_lookup).fetch_registration("acme.com")

    assert info == RegistrationInfo()
    assert info.populated_fields() == []


@pytest.mark.asyncio
async def test_lookup_timeout_returns_empty_info(settings):
    def slow_lookup(domain):
        time.sleep(0.5)
        return "Registrar: Too Late Inc\n"

    fast = settings.model_copy(update={"whois_timeout_seconds": 0.05})
    info = await WhoisFetcher(fast, lookup=slow_lookup).fetch_registration("acme.com")

    assert info == RegistrationInfo()


@pytest.mark.asyncio
async def test_unregistered_domain_is_logged_below_warning(settings, caplog):
    def not_found(domain):
        raise PywhoisError(f'No match for "{domain.upper()}".')

    with caplog.at_level(logging.DEBUG, logger="adapters.whois_fetcher"):
        info = await WhoisFetcher(settings, lookup=not_found).fetch_registration("acme.com")

    assert info == RegistrationInfo()
    assert not [r for r in caplog.records if r.levelno >= logging.WARNING]
    assert any("No WHOIS record for acme.com" in r.getMessage() for r in caplog.records)


@pytest.mark.asyncio
async def test_transport_failure_is_logged_as_warning(settings, caplog):
    def failing_lookup(domain):
        raise ConnectionResetError("whois server hung up")

    with caplog.at_level(logging.DEBUG, logger="adapters.whois_fetcher"):
        await WhoisFetcher(settings, lookup=failing_lookup).fetch_registration("acme.com")

    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert len(warnings) == 1
    assert "ConnectionResetError" in warnings[0].getMessage()


@pytest.mark.asyncio
async def test_default_lookup_bounds_the_socket_timeout(settings, monkeypatch):
    calls = []

    def fake_whois(domain, **kwargs):
        calls.append((domain, kwargs))
        return SimpleNamespace(text="Registrar: Example Corp\n")

    monkeypatch.setattr(whois_fetcher.whois, "whois", fake_whois)
    configured = settings.model_copy(update={"whois_timeout_seconds": 12.0})

    info = await WhoisFetcher(configured).fetch_registration("acme.com")

    assert info.registrar == "Example Corp"
    assert calls == [("acme.com", {"quiet": True, "timeout": 12})]
