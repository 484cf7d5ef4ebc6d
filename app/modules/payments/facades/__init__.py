# -*- coding: utf-8 -*-
"""
app/modules/payments/facades/__init__.py

Punto de entrada del paquete de fachadas del módulo Payments.

Para evitar dependencias circulares este __init__ NO importa
submódulos; cada facade se importa desde su paquete:

    from app.modules.payments.facades.checkout import create_purchase_order
    from app.modules.payments.facades.webhooks import process_paypal_webhook

Autor: CourseHub
Fecha: 19/10/2026
"""

__all__: list[str] = []

# Fin del archivo app/modules/payments/facades/__init__.py
