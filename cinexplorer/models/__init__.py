from sqlalchemy.orm import declarative_base

Base = declarative_base()

from cinexplorer.models.admin import Admin  # noqa: E402
from cinexplorer.models.cinema import Cinema  # noqa: E402
from cinexplorer.models.movie import Movie  # noqa: E402
from cinexplorer.models.session import MovieSession  # noqa: E402
from cinexplorer.models.ticket_type import TicketType  # noqa: E402
from cinexplorer.models.promotion import Promotion  # noqa: E402
from cinexplorer.models.purchase import Purchase  # noqa: E402
