# Force SQLModel table registration at test discovery time
# This ensures all models are registered before any test database creation
from lems.models.core_values_form import CoreValuesForm  # noqa: F401
from lems.models.event import Event  # noqa: F401
from lems.models.robot_game_match import RobotGameMatch  # noqa: F401
from lems.models.robot_game_table import RobotGameTable  # noqa: F401
from lems.models.team import Team  # noqa: F401
from lems.models.user import User  # noqa: F401
