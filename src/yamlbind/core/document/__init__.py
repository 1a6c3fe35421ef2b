# src/yamlbind/core/document/__init__.py
"""
Adaptadores do documento YAML consumidos pela camada de binding.

    - `node`   → navegação, valor bruto, comentários e extratores primitivos
    - `loader` → leitura e escrita do arquivo em estilo bloco
"""

from .loader import LoaderOptions, YamlDocumentLoader
from .node import DocumentNode, to_document_value

__all__ = ["DocumentNode", "LoaderOptions", "YamlDocumentLoader", "to_document_value"]
