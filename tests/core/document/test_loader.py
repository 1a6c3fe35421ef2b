# tests/core/document/test_loader.py
"""
Testes do loader YAML (leitura e escrita em estilo bloco).

Os testes asseguram que:
- arquivo vazio é interpretado como mapa vazio
- comentários escritos à mão sobrevivem a um ciclo load/save
- a escrita usa estilo bloco com indentação 2
- conteúdo inválido ou raiz não-mapa é erro de formato
- arquivo ausente é erro de I/O com contexto
"""

from pathlib import Path

import pytest
from ruamel.yaml.comments import CommentedMap

from yamlbind import ConfigIOError, DocumentFormatError
from yamlbind.core.document import DocumentNode, LoaderOptions, YamlDocumentLoader


def test_empty_file_loads_as_empty_mapping(tmp_path: Path):
    path = tmp_path / "c.yml"
    path.write_text("", encoding="utf-8")
    root = YamlDocumentLoader(path).load()
    assert isinstance(root, CommentedMap)
    assert root == {}


def test_round_trip_preserves_hand_written_comments(tmp_path: Path):
    path = tmp_path / "c.yml"
    path.write_text("# top\nserver:\n  # the port\n  port: 1\n", encoding="utf-8")
    loader = YamlDocumentLoader(path)
    root = loader.load()
    DocumentNode(root).node("server", "host").set("localhost")
    loader.save(root)

    text = path.read_text(encoding="utf-8")
    assert "# top" in text
    assert "# the port" in text
    assert "  port: 1" in text
    assert "  host: localhost" in text


def test_save_uses_block_style(tmp_path: Path):
    path = tmp_path / "c.yml"
    root = CommentedMap()
    DocumentNode(root).node("admins").set(["a", "b"])
    DocumentNode(root).node("server", "port").set(2)
    YamlDocumentLoader(path).save(root)

    text = path.read_text(encoding="utf-8")
    assert "admins:\n  - a\n  - b\n" in text
    assert "server:\n  port: 2\n" in text
    assert "[" not in text


def test_saved_comment_is_rendered_above_key(tmp_path: Path):
    path = tmp_path / "c.yml"
    root = CommentedMap()
    node = DocumentNode(root).node("server", "port")
    node.set(25565)
    node.comment = "Listening port"
    YamlDocumentLoader(path).save(root)

    text = path.read_text(encoding="utf-8")
    assert text.index("# Listening port") < text.index("port: 25565")


def test_invalid_yaml_is_format_error(tmp_path: Path):
    path = tmp_path / "c.yml"
    path.write_text("server: [unclosed\n", encoding="utf-8")
    with pytest.raises(DocumentFormatError) as info:
        YamlDocumentLoader(path).load()
    assert info.value.path == path
    assert info.value.operation == "load"


def test_non_mapping_root_is_format_error(tmp_path: Path):
    path = tmp_path / "c.yml"
    path.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(DocumentFormatError):
        YamlDocumentLoader(path).load()


def test_missing_file_is_io_error(tmp_path: Path):
    with pytest.raises(ConfigIOError) as info:
        YamlDocumentLoader(tmp_path / "absent.yml").load()
    assert not isinstance(info.value, DocumentFormatError)
    assert "absent.yml" in str(info.value)


def test_custom_indent(tmp_path: Path):
    path = tmp_path / "c.yml"
    root = CommentedMap()
    DocumentNode(root).node("a", "b").set(1)
    YamlDocumentLoader(path, LoaderOptions(indent=4)).save(root)
    assert "a:\n    b: 1\n" in path.read_text(encoding="utf-8")
