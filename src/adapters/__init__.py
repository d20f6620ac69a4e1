"""Adaptadores de infraestructura (OpenAI, DNS, WHOIS, HTTP, exportación)."""
