"""Client route paths returned as redirect targets"""

from enum import Enum


class Route(str, Enum):
    HOME = "/"
    AUTH = "/auth"
    EMAIL_VERIFICATION = "/email-verification"
    PHONE_VERIFICATION = "/phone-verification"
    OWNER_DASHBOARD = "/owner-dashboard"
    CUSTOMER_DASHBOARD = "/customer-dashboard"
    ADMIN_DASHBOARD = "/admin-dashboard"
    FIND_PLAYERS = "/find-players"
    PLAYER_PROFILE_SETUP = "/player-profile-setup"
    MY_PROFILE = "/my-profile"
