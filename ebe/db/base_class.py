# ebe/db/base_class.py

from sqlalchemy.orm import declarative_base

# Every model in the service inherits from this one declarative base.
Base = declarative_base()
