"""SafeHarbor services.

- assessment_engine: questionnaire triage (pure, deterministic)
- mood_service: mood-history risk trends (pure, deterministic)
- prevention_service: personalized prevention plans (pure, deterministic)
- triage_api: Flask HTTP layer; the only place outcomes are logged
"""
