"""
Email formatters — turn request records and service options into the two
staff emails.
"""

NO_OPTIONS_NOTICE = '⚠️ No service options found in database for this product/warranty combination.'
DEFAULT_BOOKING = 'Contact service agent for booking'


def request_alert_subject(customer):
    return f"📋 Service Request Ready - {customer.name} - {customer.si_number}"


def format_request_alert(customer, sku, url='N/A'):
    """Staff alert for a new request, with a copy-paste email for the customer."""
    return f"""Hi,

A new service request has been created for:
- Customer: {customer.name}
- Invoice: {customer.si_number}
- Product: {sku}

📋 Customer Details:
- Email: {customer.email}
- Phone: {customer.phone}
- Address: {customer.address}
- Purchase Date: {customer.shipment_date}

---

✉️ COPY & PASTE - Email to Customer

---COPY FROM HERE---

Subject: Service Request - {sku} - Invoice {customer.si_number}

Hi {customer.name},

Thank you for contacting us about your appliance service request.

We have your purchase details on file (Invoice {customer.si_number}, purchased {customer.shipment_date}).

To help us arrange the best service for you, please reply to this email with:

- Serial number (found on your appliance)
- Description of the problem you're experiencing
- Do you believe your product is under warranty? (Yes/No)
- Photos (optional - if you believe they will assist us)

Once we receive this information, we'll respond with your service options.

Best regards,
Winning Appliances Service Team

---COPY TO HERE---

View invoice: {url or 'N/A'}
"""


def format_option(option, number):
    """Format one service option as a numbered block."""
    hours = option.get('Business Hours')
    contact = option.get('Phone Number') or 'N/A'
    if hours:
        contact = f"{contact} ({hours})"

    lines = [
        f"Option {number}: {option.get('Service Agent') or 'N/A'}",
        "",
        f"📞 Contact: {contact}",
        f"💰 Cost: {option.get('Service Call Fee') or 'N/A'}",
        f"⏱️ Response Time: {option.get('Expected Timeframe') or 'N/A'}",
        "",
        option.get('Phone Instructions') or DEFAULT_BOOKING,
        "",
        "---",
    ]
    return '\n'.join(lines)


def format_options(options):
    if not options:
        return NO_OPTIONS_NOTICE
    return '\n\n'.join(format_option(option, i) for i, option in enumerate(options, start=1))


def options_alert_subject(request):
    return f"⚡ Customer Replied - {request.customer_name} - Service Options Ready"


def format_options_alert(request, reply, options):
    """Staff alert for a customer reply, listing the matched service options."""
    return f"""Hi,

🎉 {request.customer_name} replied with appliance details!

📋 Customer Details:
- Name: {request.customer_name}
- Email: {request.customer_email}
- Phone: {request.customer_phone}

🛒 Purchase Info:
- Invoice: {request.si_number}
- SKU: {request.sku}
- Purchase Date: {request.shipment_date}

🔧 Appliance Details:
- Serial: {reply.serial_number}
- Warranty: {reply.warranty_status}
- Problem: {reply.problem_description}

---

🛠️ SERVICE OPTIONS:

{format_options(options)}

Copy and send to customer.
"""
