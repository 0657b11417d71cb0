from .i_crm_repository import CrmConnectionError, ICrmRepository
from .i_browser_gateway import IBrowserGateway
from .i_search_engine import ISearchEngine
from .i_email_domain_gateway import EmailDomainResult, IEmailDomainGateway
from .i_report_writer import IReportWriter

__all__ = [
    "CrmConnectionError",
    "ICrmRepository",
    "IBrowserGateway",
    "ISearchEngine",
    "EmailDomainResult",
    "IEmailDomainGateway",
    "IReportWriter",
]
