from app.models.user import User
from app.models.company import Company
from app.models.user_company import UserCompany
from app.models.asset import Asset
from app.models.contract import Contract
from app.models.license import License
from app.models.maintenance_record import MaintenanceRecord
from app.models.activity_log import ActivityLog
from app.models.notification import Notification
