from .match_table import MatchTable
from .relation import MatchRelation
