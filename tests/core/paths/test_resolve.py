# tests/core/paths/test_resolve.py
"""
Testes do resolvedor de chaves pontuadas.

Os testes asseguram que:
- a divisão ocorre apenas no separador `.`
- segmentos vazios são repassados sem rejeição
- a resolução é pura e estável
"""

from yamlbind.core.paths import is_well_formed, join, resolve


def test_resolve_splits_on_dots():
    assert resolve("server.port") == ("server", "port")
    assert resolve("admins") == ("admins",)


def test_resolve_keeps_segments_verbatim():
    assert resolve("world.spawn-radius") == ("world", "spawn-radius")
    assert resolve("a b.c_d") == ("a b", "c_d")


def test_resolve_passes_empty_segments_through():
    assert resolve("") == ("",)
    assert resolve("a..b") == ("a", "", "b")
    assert resolve(".a") == ("", "a")
    assert resolve("a.") == ("a", "")


def test_resolve_is_deterministic():
    assert resolve("x.y.z") == resolve("x.y.z")


def test_join_inverts_resolve():
    assert join(resolve("x.y.z")) == "x.y.z"


def test_is_well_formed():
    assert is_well_formed(("a", "b"))
    assert not is_well_formed(())
    assert not is_well_formed(("a", ""))
