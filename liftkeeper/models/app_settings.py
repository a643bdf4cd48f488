from typing import List, Optional

from liftkeeper.models.base import DomainModel
from liftkeeper.models.building import Address

DEFAULT_FAULT_REPORT_TEMPLATE = """
<div class="fault-report">
  <div class="header">
    <div class="logo-section">{{LOGO}}</div>
    <div class="company-details">
      <div class="company-name">{{COMPANY_NAME}}</div>
      <div class="certifications">{{COMPANY_SLOGAN}}</div>
    </div>
    <div class="address-info">
      <div class="address-text">{{COMPANY_ADDRESS}}</div>
      <div class="phone-text">Tel: {{COMPANY_PHONE}}</div>
    </div>
  </div>
  <div class="report-title"><h1>FAULT REPORT FORM</h1></div>
  <div class="building-info">
    <h2>{{BUILDING_NAME}}</h2>
    <p>{{BUILDING_ADDRESS}}</p>
  </div>
  <div class="footer">
    <p>For emergencies call 112</p>
    <p>You can reach us on {{COMPANY_PHONE}}</p>
  </div>
</div>
"""


class AppSettings(DomainModel):
    app_title: str = "Elevator Maintenance Tracker"
    logo: Optional[str] = None
    company_name: str = ""
    company_phone: str = ""
    company_address: Address = Address()
    company_slogan: Optional[str] = None
    certificates: List[str] = []
    receipt_template: str = ""
    default_maintenance_note: Optional[str] = None
    installation_proposal_template: str = ""
    maintenance_proposal_template: str = ""
    revision_proposal_template: str = ""
    fault_report_template: str = ""
    auto_save_interval: int = 60  # seconds


def default_settings() -> AppSettings:
    """Settings a fresh installation starts with."""
    return AppSettings(
        company_name="TKNLIFT",
        company_phone="0555 123 45 67",
        company_address=Address(
            mahalle="Merkez Mahalle",
            sokak="Ana Cadde",
            il="Istanbul",
            ilce="Kadikoy",
            bina_no="123",
        ),
        company_slogan="Your address for a safe ride up",
        default_maintenance_note=(
            "The general condition of the elevator was checked during this "
            "maintenance and the necessary adjustments were made."
        ),
        fault_report_template=DEFAULT_FAULT_REPORT_TEMPLATE,
    )
