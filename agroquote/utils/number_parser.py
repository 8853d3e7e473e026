# agroquote/utils/number_parser.py

from decimal import Decimal, InvalidOperation
from typing import Union

def parse_decimal(value: Union[str, int, float, Decimal], field_name: str = "valor") -> Decimal:
    """
    Converts user input into a Decimal. Accepts "1,5" as well as "1.5";
    "1.234,56" is read as 1234.56.
    Raises ValueError with a user-facing message for empty or non-numeric text.
    """
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, bool):
        raise ValueError(f"O campo '{field_name}' deve ser numérico.")
    elif isinstance(value, (int, float)):
        result = Decimal(str(value))
    else:
        text = (value or "").strip().replace("R$", "").strip()
        if not text:
            raise ValueError(f"O campo '{field_name}' é obrigatório.")
        if "," in text:
            # Only "1.234,56": a dot after the comma means the other convention.
            if "." in text[text.index(","):]:
                raise ValueError(f"O campo '{field_name}' deve usar vírgula como separador decimal. "
                                 f"Recebido: '{value}'.")
            text = text.replace(".", "").replace(",", ".")
        try:
            result = Decimal(text)
        except InvalidOperation:
            raise ValueError(f"O campo '{field_name}' deve ser numérico. Recebido: '{value}'.")

    if not result.is_finite():
        raise ValueError(f"O campo '{field_name}' deve ser um número finito.")
    return result
