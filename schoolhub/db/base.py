# schoolhub/db/base.py
from schoolhub.db.base_class import Base  # noqa: F401

# Import every module that defines tables so Base.metadata knows them
from schoolhub.models import school  # noqa: F401
from schoolhub.models import user  # noqa: F401
from schoolhub.models import course  # noqa: F401
from schoolhub.models import survey  # noqa: F401
from schoolhub.models import audit  # noqa: F401
