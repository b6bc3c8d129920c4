from lems.models.core_values_form import CoreValuesForm
from lems.models.event import Event
from lems.models.robot_game_match import RobotGameMatch
from lems.models.robot_game_table import RobotGameTable
from lems.models.scoresheet import LOCALIZED_SCORESHEET_STATUS, ScoresheetStatus
from lems.models.team import Team
from lems.models.user import LOCALIZED_ROLES, ROLE_TYPES, User

__all__ = [
    "Event",
    "Team",
    "RobotGameTable",
    "RobotGameMatch",
    "User",
    "ROLE_TYPES",
    "LOCALIZED_ROLES",
    "CoreValuesForm",
    "ScoresheetStatus",
    "LOCALIZED_SCORESHEET_STATUS",
]
