# src/yamlbind/core/__init__.py
"""
Core do yamlbind.

Este pacote reúne a camada de binding entre objetos de configuração em
memória e um documento YAML persistido, editável à mão e com comentários.

Componentes principais (das folhas para o topo):
    - paths         → resolução de chaves pontuadas em caminhos
    - coercion      → conversão entre valores do documento e tipos declarados
    - fields        → declaração e tabela de campos vinculados
    - hydration     → semeadura de defaults e leitura de valores para os campos
    - configuration → ciclo de vida (load/reload/save/get/set/remove) e lock
    - document      → adaptadores da árvore e do arquivo YAML (ruamel.yaml)

Princípios fundamentais:
    - Erros de declaração e de I/O são fatais e tipados
    - Um único valor malformado nunca impede a carga dos demais campos
    - Toda mutação é persistida imediatamente e de forma isolada
"""
