from .base_schemas import *
from .user_schemas import *
from .patient_schemas import *
from .admission_schemas import *
from .treatment_log_schemas import *
from .billing_schemas import *
from .inventory_schemas import *
from .diet_plan_schemas import *
from .affiliate_schemas import *
from .activity_schemas import *
from .response_schemas import *
