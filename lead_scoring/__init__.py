"""
Lead Scoring Service - Buying Intent
====================================
Scores sales leads against a product offer:
  Rules: role seniority, industry fit, profile completeness (max 50)
  LLM:   intent classification High/Medium/Low (50/30/10)
"""

__version__ = "1.0.0"
