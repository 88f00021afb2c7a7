"""
Catalog of supported reciters.
"""

from tartil.exceptions import UnknownReciterError
from tartil.models import Reciter

DEFAULT_RECITER = "ar.alafasy"

RECITERS: dict[str, Reciter] = {
    r.id: r
    for r in (
        Reciter(id="ar.alafasy", folder="Alafasy_128kbps", name="مشاري العفاسي"),
        Reciter(
            id="ar.abdurrahmaansudais",
            folder="AbdurRahman_As-Sudais_192kbps",
            name="عبد الرحمن السديس",
        ),
        Reciter(id="ar.mahermuaiqly", folder="Maher_Al_Muaiqly_128kbps", name="ماهر المعيقلي"),
        Reciter(id="ar.saadalghamdi", folder="Saad_Al-Ghamadi_64kbps", name="سعد الغامدي"),
        Reciter(
            id="ar.abdulbasitmurattal",
            folder="Abdul_Basit_Murattal_192kbps",
            name="عبد الباسط مرتل",
        ),
    )
}


def get_reciter(reciter_id: str) -> Reciter:
    """
    Look up a reciter by identifier.

    Raises:
        UnknownReciterError: If the identifier is not in the catalog
    """
    try:
        return RECITERS[reciter_id]
    except KeyError:
        raise UnknownReciterError(reciter_id) from None


def list_reciters() -> list[Reciter]:
    """All known reciters, in catalog order."""
    return list(RECITERS.values())
