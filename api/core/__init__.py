"""
Shared, cross-cutting code for the API.

`core/` holds the small building blocks every feature uses (settings, DB
pool, logging, CORS, pagination, the moderation client and the error
taxonomy). Question/answer logic lives in `questions/` and `answers/`;
persistence lives in `storage/`.
"""
