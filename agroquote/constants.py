# agroquote/constants.py

from enum import Enum

# General
DATE_FORMAT = "%Y-%m-%d"
DEFAULT_CONVERSION_FACTOR = "1.0"

class RankLabel(Enum):
    WINNER = "Vencedor"
    LOSER = "Perdedor"

class ReportMode(Enum):
    WINNERS = "Relatório de Cotações Vencedoras"
    FULL = "Relatório Completo de Cotações (Vencedores e Perdedores)"
