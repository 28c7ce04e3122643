"""survey_server — FastAPI REST API for survey definition and collection.

Route families:
  - ``/survey``         public read/submit of active surveys
  - ``/admin/auth``     admin sign-in / sign-out / identity
  - ``/admin/surveys``  survey management (session cookie auth)
  - ``/data/surveys``   machine data API (``X-API-Key`` auth)
"""
