"""Triage API: HTTP interface for assessment, mood risk and prevention plans.

Endpoints:
- GET /health, GET /ready
- GET /questions - Ordered question catalog
- POST /assessment - Crisis severity assessment
- POST /mood-risk - Mood-history risk trend
- POST /prevention-plan - Personalized prevention plan
- GET /resources - Crisis resource list

Emergency-service lookup and alert delivery are the caller's job once
severity is known.
"""
