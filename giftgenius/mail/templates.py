from __future__ import annotations

from html import escape

_STYLE = """
body { font-family: Arial, sans-serif; margin: 0; padding: 0; background-color: #f8fafc; }
.container { max-width: 600px; margin: 0 auto; background: white; }
.header { background: linear-gradient(135deg, #8b5cf6, #ec4899); padding: 40px 20px; text-align: center; color: white; }
.content { padding: 40px 30px; color: #1f2937; line-height: 1.6; }
.code { font-size: 36px; font-weight: bold; color: #8b5cf6; letter-spacing: 8px; font-family: 'Courier New', monospace; }
.button { display: inline-block; background: #8b5cf6; color: white; padding: 15px 30px; text-decoration: none; border-radius: 8px; font-weight: bold; }
.footer { padding: 30px; text-align: center; color: #9ca3af; font-size: 14px; }
"""

_LAYOUT = """<!DOCTYPE html>
<html>
<head><meta charset="utf-8"><style>{style}</style></head>
<body>
  <div class="container">
    <div class="header"><h1>🎁 GiftGenius</h1><p>{headline}</p></div>
    <div class="content">{body}</div>
    <div class="footer">Este email foi enviado pelo <strong>GiftGenius</strong>.</div>
  </div>
</body>
</html>
"""


def verification_email(name: str, code: str, ttl_minutes: int) -> tuple[str, str]:
    """Return ``(subject, html)`` for the e-mail verification message."""
    body = (
        f"<p>Olá, {escape(name)}!</p>"
        "<p>Obrigado por se cadastrar no <strong>GiftGenius</strong>. "
        "Digite este código na página de verificação para ativar sua conta:</p>"
        f'<p class="code">{escape(code)}</p>'
        f"<p>O código expira em {ttl_minutes} minutos. "
        "Se você não criou esta conta, ignore este email.</p>"
    )
    html = _LAYOUT.format(style=_STYLE, headline="Confirme seu email", body=body)
    return "🎁 Confirme seu email no GiftGenius", html


def welcome_email(name: str, app_url: str) -> tuple[str, str]:
    """Return ``(subject, html)`` for the post-verification welcome message."""
    body = (
        f"<p>Bem-vindo, {escape(name)}!</p>"
        "<p>Sua conta está ativa. Responda ao questionário e receba sugestões "
        "de presentes das melhores lojas.</p>"
        f'<p><a class="button" href="{escape(app_url)}/questionario">'
        "Encontrar Meu Primeiro Presente</a></p>"
    )
    html = _LAYOUT.format(style=_STYLE, headline="Sua conta está pronta", body=body)
    return "🎉 Bem-vindo ao GiftGenius!", html
