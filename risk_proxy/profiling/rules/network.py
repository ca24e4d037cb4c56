"""Network and geography signals.

There is no IP data in the scoring export; the reported country is the
subject's birth country (or citizenship), and a mismatch is flagged when
the two columns differ.
"""

from risk_proxy.models import NetworkSignals
from risk_proxy.profiling.normalize import NormalizedRow


def check_network(row: NormalizedRow) -> NetworkSignals:
    """Derive network signals from the country columns.

    The mismatch comparison is exact on the raw cell values: "USA" and "usa"
    differ, while two missing cells count as equal.
    """
    ip_country = row.birth_country or row.citizenship or "Unknown"

    return NetworkSignals(
        ip_type="Unknown",
        ip_country=str(ip_country),
        mismatch=row.birth_country != row.citizenship,
    )
