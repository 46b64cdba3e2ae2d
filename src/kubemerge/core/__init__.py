# src/kubemerge/core/__init__.py
"""
Core do kubemerge.

Componentes principais:
    - kubeconfig  → modelo tipado de documento e codec YAML (parse/serialize)
    - merge       → fold de documentos em ordem de precedência
    - validation  → integridade referencial do documento mesclado
    - config      → configuração da ferramenta (defaults + overrides)
    - pipeline    → protocolos de Step, contexto de execução e registry
    - engine      → planejamento (DAG) e execução controlada do pipeline

O núcleo de domínio (kubeconfig, merge, validation) não realiza I/O: recebe
textos já lidos e devolve valores. Leitura de diretórios, backup e escrita
vivem nos Steps (`kubemerge.steps`).
"""
