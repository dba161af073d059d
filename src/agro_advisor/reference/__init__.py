"""Static agronomic configuration.

Reference data that doesn't change with API calls: application threshold
guidelines and pest/disease phenology tables. Both are validated once at
import and exposed as read-only mappings.

Adding a new table:
1. Create ``reference/{name}.py`` with constants and a validating loader
2. Re-export from this ``__init__.py``
"""

from agro_advisor.reference.pests import PEST_MODELS as PEST_MODELS
from agro_advisor.reference.pests import PEST_TABLE_VERSION as PEST_TABLE_VERSION
from agro_advisor.reference.pests import get_pest_model as get_pest_model
from agro_advisor.reference.pests import load_pest_models as load_pest_models
from agro_advisor.reference.pests import load_pest_models_file as load_pest_models_file
from agro_advisor.reference.thresholds import MODE_FACTORS as MODE_FACTORS
from agro_advisor.reference.thresholds import THRESHOLDS as THRESHOLDS
from agro_advisor.reference.thresholds import get_guideline as get_guideline
