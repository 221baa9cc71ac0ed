"""Staff email content."""
from service_automation.models import CustomerData, ReplyDetails, ServiceRequest
from service_automation.services.formatter_service import (
    NO_OPTIONS_NOTICE, format_option, format_options_alert, format_request_alert,
    request_alert_subject,
)

CUSTOMER = CustomerData(
    name="Jane Doe", email="jane@example.com", phone="0400 000 000",
    address="1 Main St, Sydney", si_number="SI12345678", shipment_date="01/02/2025",
)

REQUEST = ServiceRequest(
    id=1, si_number="SI12345678", customer_email="jane@example.com", sku="B12345",
    assigned_user_email="staff@example.com", customer_name="Jane Doe",
)


def test_request_alert_contains_copy_paste_block():
    body = format_request_alert(CUSTOMER, "B12345")

    assert "- Customer: Jane Doe" in body
    assert "Subject: Service Request - B12345 - Invoice SI12345678" in body
    assert "---COPY FROM HERE---" in body and "---COPY TO HERE---" in body
    assert body.rstrip().endswith("View invoice: N/A")
    assert request_alert_subject(CUSTOMER) == "📋 Service Request Ready - Jane Doe - SI12345678"


def test_option_block_with_hours_and_defaults():
    block = format_option({"Service Agent": "BSH", "Phone Number": "1300", "Business Hours": "9-5"}, 2)

    assert block.startswith("Option 2: BSH")
    assert "📞 Contact: 1300 (9-5)" in block
    assert "💰 Cost: N/A" in block
    assert "Contact service agent for booking" in block


def test_option_block_without_hours():
    block = format_option({"Phone Number": "1300"}, 1)
    assert "📞 Contact: 1300\n" in block
    assert "Option 1: N/A" in block


def test_options_alert_lists_options_or_notice():
    reply = ReplyDetails(customer_email="jane@example.com", serial_number="SN1",
                         warranty_status="In Warranty", problem_description="Noisy")

    with_options = format_options_alert(REQUEST, reply, [{"Service Agent": "A"}, {"Service Agent": "B"}])
    assert "Option 1: A" in with_options and "Option 2: B" in with_options
    assert "- Serial: SN1" in with_options

    without = format_options_alert(REQUEST, reply, [])
    assert NO_OPTIONS_NOTICE in without
