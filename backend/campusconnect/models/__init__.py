from campusconnect.models.account import Account
from campusconnect.models.profile import Profile
from campusconnect.models.job import Job
from campusconnect.models.application import Application
from campusconnect.models.notification import Notification
from campusconnect.models.message import Message

__all__ = ["Account", "Profile", "Job", "Application", "Notification", "Message"]
