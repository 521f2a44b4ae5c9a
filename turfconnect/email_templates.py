"""
MJML Email Templates
Admin notifications for turf registrations
"""

from datetime import datetime
from html import escape
from typing import Optional

from .config import FRONTEND_URL

# Pitch-green color scheme
THEME = {
    "primary": "#16a34a",
    "primary_dark": "#15803d",
    "primary_light": "#dcfce7",
    "background": "#f8fafc",
    "card_bg": "#ffffff",
    "text_primary": "#0f172a",
    "text_secondary": "#334155",
    "text_muted": "#64748b",
    "border": "#e2e8f0",
    "warning": "#f59e0b",
    "warning_bg": "#fff3cd",
    "danger": "#ef4444",
}


def _value(value, suffix: str = "") -> str:
    if value is None or value == "":
        return "Not specified"
    return f"{escape(str(value))}{suffix}"


def _detail_rows(rows: list[tuple[str, str]]) -> str:
    cells = "".join(
        f'<tr><td style="padding: 6px 0; font-weight: 600; color: {THEME["text_secondary"]}; width: 40%;">{label}</td>'
        f'<td style="padding: 6px 0; color: {THEME["text_primary"]};">{value}</td></tr>'
        for label, value in rows
    )
    return f'<mj-table font-size="14px" padding="0 0 24px 0">{cells}</mj-table>'


def get_base_template(
    title: str,
    preview_text: str,
    content_sections: str,
    cta_url: Optional[str] = None,
    cta_label: Optional[str] = None,
) -> str:
    """Base MJML template wrapper for all emails"""

    cta_section = ""
    if cta_url and cta_label:
        cta_section = f"""
        <mj-section padding="20px 0">
          <mj-column>
            <mj-button
              href="{cta_url}"
              background-color="{THEME['primary']}"
              color="#ffffff"
              font-weight="600"
              border-radius="8px"
              padding="18px 40px"
              font-size="16px">
              {cta_label}
            </mj-button>
          </mj-column>
        </mj-section>
        """

    return f"""
    <mjml>
      <mj-head>
        <mj-title>{title}</mj-title>
        <mj-preview>{preview_text}</mj-preview>
        <mj-attributes>
          <mj-all font-family="-apple-system, BlinkMacSystemFont, 'Segoe UI', 'Helvetica Neue', Arial, sans-serif" />
          <mj-text font-size="16px" line-height="1.6" color="{THEME['text_secondary']}" />
        </mj-attributes>
      </mj-head>
      <mj-body background-color="{THEME['background']}">
        <mj-section background-color="{THEME['primary']}" padding="28px 20px">
          <mj-column>
            <mj-text align="center" font-size="26px" font-weight="700" color="#ffffff" padding="0">
              {title}
            </mj-text>
          </mj-column>
        </mj-section>

        <mj-section background-color="#ffffff" padding="32px 40px 40px 40px">
          <mj-column>
            {content_sections}
          </mj-column>
        </mj-section>

        {cta_section}

        <mj-section padding="24px 20px">
          <mj-column>
            <mj-text align="center" font-size="12px" color="#94a3b8" padding="0">
              This email was sent automatically by TurfConnect.
            </mj-text>
          </mj-column>
        </mj-section>
      </mj-body>
    </mjml>
    """


def turf_approval_template(turf: dict, owner: dict) -> str:
    """New turf registration notice for the platform admin"""
    sports = ", ".join(turf.get("supported_sports") or []) or None
    amenities = ", ".join(turf.get("amenities") or []) or None
    peak_hours = (
        f"{turf['peak_hours_start']} - {turf['peak_hours_end']}"
        if turf.get("peak_hours_start") and turf.get("peak_hours_end")
        else None
    )

    turf_rows = _detail_rows(
        [
            ("Name", _value(turf.get("name"))),
            ("Area", _value(turf.get("area"))),
            ("Address", _value(turf.get("address"))),
            ("Surface", _value(turf.get("surface_type"))),
            ("Capacity", _value(turf.get("capacity"), " players")),
            ("Base Price", _value(turf.get("base_price_per_hour"), "/hour")),
            ("Sports", _value(sports)),
            ("Amenities", _value(amenities)),
            ("Peak Hours", _value(peak_hours)),
            ("Peak Premium", _value(turf.get("peak_hours_premium_percentage"), "%")),
            ("Weekend Premium", _value(turf.get("weekend_premium_percentage"), "%")),
            ("Contact", _value(turf.get("contact_phone"))),
            ("Email", _value(turf.get("contact_email"))),
        ]
    )
    owner_rows = _detail_rows(
        [
            ("Business Name", _value(owner.get("business_name"))),
            ("Owner Name", _value(owner.get("owner_name"))),
            ("Business Type", _value(owner.get("business_type"))),
            ("Phone", _value(owner.get("contact_phone"))),
            ("Email", _value(owner.get("contact_email"))),
            ("Address", _value(owner.get("address"))),
            ("Experience", _value(owner.get("years_of_operation"), " years")),
        ]
    )

    description = ""
    if turf.get("description"):
        description = f"""
        <mj-text font-weight="600" color="{THEME['text_primary']}" padding="0 0 8px 0">📝 Description</mj-text>
        <mj-text color="{THEME['text_muted']}" padding="0 0 24px 0">{escape(turf['description'])}</mj-text>
        """

    content = f"""
    <mj-text container-background-color="{THEME['warning_bg']}" color="#856404" padding="16px">
      ⚠️ <strong>Action Required:</strong> A new turf has been submitted and requires your
      verification before going live on the platform.
    </mj-text>

    <mj-text font-size="18px" font-weight="600" color="{THEME['text_primary']}" padding="24px 0 8px 0">
      🏟️ Turf Information
    </mj-text>
    {turf_rows}

    <mj-text font-size="18px" font-weight="600" color="{THEME['text_primary']}" padding="0 0 8px 0">
      👤 Business Owner
    </mj-text>
    {owner_rows}

    {description}

    <mj-text font-size="13px" color="{THEME['text_muted']}" padding="0">
      <strong>Turf ID:</strong> {escape(str(turf.get('id', '')))}<br/>
      <strong>Owner ID:</strong> {escape(str(owner.get('id', '')))}<br/>
      <strong>Submitted:</strong> {datetime.utcnow().strftime('%d %B %Y, %H:%M')} UTC
    </mj-text>
    """

    return get_base_template(
        title="🏟️ New Turf Registration",
        preview_text=f"Business verification required for {turf.get('name', 'a new turf')}",
        content_sections=content,
        cta_url=f"{FRONTEND_URL}/admin-dashboard",
        cta_label="Review in Admin Dashboard",
    )
