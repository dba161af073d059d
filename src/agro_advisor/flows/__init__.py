"""
Prefect flows for the advice pipeline.

Flows:
- advise: Fetch weather since biofix, resolve the pest stage, score today's
  application window, and save a JSON report

Usage (local):
    python -m agro_advisor.flows.advise
    agro-advisor advise --pest codling_moth --biofix 2024-09-01

Usage (Prefect):
    prefect server start  # Optional, for dashboard
    prefect deployment run 'advise/default'
"""
