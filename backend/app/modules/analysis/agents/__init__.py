"""Hybrid document analysis agents.

  ProviderAgent x2:  OpenAI / Gemini adapters, each with its own CooldownBreaker
  Orchestrator:      concurrent fan-out to both providers (no LLM)
  Merger:            consensus of two provider analyses (programmatic)
  Validator:         clips suggestions to the fixed vocabularies
  RuleBased:         deterministic filename/category heuristics (baseline)
  Assembler:         field-by-field final payload + warnings
"""
