"""
Transactional e-mail.

Responsibilities:
- Render the verification and welcome messages from HTML templates.
- Deliver them over SMTP when credentials are configured.
- Report delivery failures as ``False`` instead of raising.
"""
