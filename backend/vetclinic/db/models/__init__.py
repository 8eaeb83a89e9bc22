# backend/vetclinic/db/models/__init__.py

from vetclinic.db.models.owner import Owner
from vetclinic.db.models.pet import Pet
from vetclinic.db.models.visit import Visit
