# tests/conftest.py
"""
Fixtures compartilhados para testes do yamlbind.

Este módulo define fixtures reutilizáveis que fornecem:
- conteúdos YAML mínimos e determinísticos
- um utilitário para escrever arquivos de configuração em `tmp_path`

Decisões arquiteturais:
    - Conteúdos YAML são fornecidos como strings
    - Todo acesso a filesystem ocorre dentro de `tmp_path`
    - Classes de configuração vivem em `tests/fixtures/configs`

Invariantes:
    - Nenhuma fixture compartilha estado entre testes
    - Todas as fixtures são seguras para execução em paralelo

Limites explícitos:
    - Não substituir testes de integração
    - Não conter lógica condicional complexa
"""

from pathlib import Path

import pytest


@pytest.fixture
def partial_server_yaml() -> str:
    """
    Fixture que fornece um documento com apenas parte das chaves do servidor.

    Usado para validar que valores existentes em disco são preservados
    e que chaves ausentes são semeadas com os defaults declarados.

    Returns:
        str: Conteúdo YAML contendo apenas `server.port`.
    """
    return """\
# edited by hand
server:
  port: 30000
"""


@pytest.fixture
def malformed_port_yaml() -> str:
    """
    Fixture que fornece um documento cujo valor de `server.port`
    não converte para inteiro.

    Returns:
        str: Conteúdo YAML com `server.port` textual.
    """
    return """\
server:
  port: not-a-number
  host: example.org
"""


@pytest.fixture
def write_config():
    """
    Fixture factory que escreve um arquivo de configuração.

    Returns:
        Callable[[Path, str, str], Path]: Função `(directory, name, text) -> path`.
    """

    def _write(directory: Path, name: str, text: str) -> Path:
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write
