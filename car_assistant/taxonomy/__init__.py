"""
Tag taxonomy.

Responsibilities:
- Hold the closed vocabulary of usage and priority tags shown by the wizard.
- Translate user-facing fuel labels into the catalog's internal labels.
- Suggest tags for catalog vehicles that were imported without any.
"""
