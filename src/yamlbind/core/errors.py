# src/yamlbind/core/errors.py
"""
Exceções canônicas da camada de binding do yamlbind.

Este módulo define a hierarquia oficial de exceções utilizadas durante
a declaração de classes de configuração, a navegação no documento,
a coerção de tipos e a persistência em disco.

Princípios fundamentais:
    - Exceções são tipadas e semânticas
    - Erros de declaração e de I/O são tratados como falhas fatais
    - Erros de coerção são locais a um único campo e nunca fatais
    - Mensagens de erro são claras e direcionadas ao autor da configuração

Taxonomia:
    - DeclarationError    → classe sem metadados ou não instanciável
    - DuplicateKeyError   → dois campos declarados na mesma chave
    - MalformedKeyError   → chave pontuada vazia ou com segmento vazio
    - ConfigIOError       → falha de diretório, arquivo, parse ou escrita
    - DocumentFormatError → conteúdo do arquivo não é um documento YAML válido
    - CoercionError       → valor do nó não converte para o tipo declarado
    - RepresentationError → valor não pertence ao modelo de valores do documento
    - HydrationError      → falha estrutural inesperada durante a hidratação

Cada classe corresponde a uma etapa do ciclo de vida (declaração, carga,
coerção, gravação), de modo que o host trate cada etapa separadamente.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union


class ConfigError(Exception):
    """
    Exceção base para erros relacionados ao binding de configuração.

    Todas as exceções levantadas durante declaração, carregamento,
    hidratação e persistência devem herdar desta classe, permitindo
    captura genérica pelo host.

    Limites explícitos:
        - Não representa erro de domínio da aplicação host
        - Não carrega stack trace próprio (usa encadeamento `from`)
    """


class DeclarationError(ConfigError):
    """
    Exceção levantada quando uma classe de configuração está mal declarada.

    Casos cobertos:
        - ausência de `@configuration_settings` na classe
        - nome de arquivo em branco
        - `default` e `default_factory` informados simultaneamente
        - classe que não pode ser construída sem argumentos

    Decisões arquiteturais:
        - A falha ocorre no momento da declaração ou do `load`
        - Nenhuma instância parcialmente carregada é retornada
    """


class DuplicateKeyError(DeclarationError):
    """
    Exceção levantada quando dois campos da mesma classe apontam
    para a mesma chave pontuada.

    A tabela de campos é construída uma única vez por classe; a
    duplicidade é detectada nesse momento, antes de qualquer I/O.
    """


class MalformedKeyError(ConfigError, ValueError):
    """
    Exceção levantada quando uma chave pontuada resolve para um caminho
    vazio ou contendo segmentos vazios (ex.: `""`, `".a"`, `"a..b"`, `"a."`).

    O resolvedor de caminhos não rejeita essas chaves; a falha surge
    na navegação do documento e é fatal para a operação que forneceu a chave.
    """


class ConfigIOError(ConfigError):
    """
    Exceção levantada quando uma etapa de I/O falha.

    Carrega o caminho do arquivo alvo e a operação que disparou a falha,
    para diagnóstico sem inspeção de estado interno. A causa original
    fica disponível em `__cause__`.
    """

    def __init__(
        self,
        message: str,
        *,
        path: Optional[Union[str, Path]] = None,
        operation: Optional[str] = None,
    ) -> None:
        self.path = Path(path) if path is not None else None
        self.operation = operation
        details = []
        if operation:
            details.append(f"operation={operation}")
        if path is not None:
            details.append(f"path={path}")
        if details:
            message = f"{message} ({', '.join(details)})"
        super().__init__(message)


class DocumentFormatError(ConfigIOError):
    """
    Exceção levantada quando o conteúdo em disco não pode ser interpretado
    como um documento YAML cuja raiz é um mapa.
    """


class CoercionError(ConfigError, TypeError):
    """
    Exceção levantada quando um valor do documento não pode ser convertido
    para o tipo declarado de um campo.

    Decisões arquiteturais:
        - Levantada explicitamente pelo registro de conversores
        - Capturada pela hidratação na granularidade de um único campo
        - Nunca interrompe a hidratação dos demais campos
    """


class RepresentationError(ConfigError, TypeError):
    """
    Exceção levantada quando um valor não pode ser representado no modelo
    de valores do documento (escalares, mapas, sequências e enums).

    A verificação ocorre antes de qualquer mutação da árvore.
    """


class HydrationError(ConfigError):
    """
    Exceção levantada quando uma falha estrutural inesperada interrompe
    a hidratação de uma instância.

    Campos já processados podem permanecer visíveis na instância:
    a hidratação não é transacional.
    """
