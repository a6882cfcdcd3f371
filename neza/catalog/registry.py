"""Static registry of SBS-supervised entities and their products.

Reference data for the simulated marketplace. Validated through the same
loader as external catalogs.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any

from neza.catalog.loader import load_catalog
from neza.schemas.catalog import ProductCatalog

SBS_ENTITIES: list[dict[str, Any]] = [
    {
        "id": "bcp",
        "name": "Banco de Crédito del Perú",
        "type": "bank",
        "sbs_code": "002",
        "products": [
            {
                "id": "bcp-credito-personal",
                "name": "Crédito Personal BCP",
                "type": "personal_loan",
                "requirements": {
                    "min_income": 1500,
                    "max_age": 70,
                    "min_age": 18,
                    "min_work_time_months": 6,
                    "max_debt_to_income": 60,
                    "min_credit_score": 350,
                    "documents": ["DNI", "Boletas de pago (3 últimas)", "Certificado de trabajo"],
                    "additional_requirements": ["No estar en INFOCORP con calificación deficiente"],
                    "restrictions": ["Solo residentes en Perú"],
                },
                "conditions": {
                    "min_amount": 1000,
                    "max_amount": 150000,
                    "min_term_months": 6,
                    "max_term_months": 60,
                    "time_to_approval": "24-48 horas",
                },
                "rate": {"min": "16.5", "max": "24.0"},
            },
            {
                "id": "bcp-credito-hipotecario",
                "name": "Crédito Hipotecario BCP",
                "type": "mortgage",
                "requirements": {
                    "min_income": 2500,
                    "max_age": 65,
                    "min_age": 21,
                    "min_work_time_months": 12,
                    "max_debt_to_income": 40,
                    "min_credit_score": 400,
                    "documents": [
                        "DNI",
                        "Boletas de pago (6 últimas)",
                        "Certificado de trabajo",
                        "Estados financieros",
                    ],
                    "additional_requirements": ["Avalúo del inmueble", "Seguro de desgravamen"],
                    "restrictions": ["Inmueble ubicado en zonas urbanas"],
                },
                "conditions": {
                    "min_amount": 50000,
                    "max_amount": 1000000,
                    "min_term_months": 60,
                    "max_term_months": 300,
                    "down_payment_percent": 10,
                    "time_to_approval": "7-15 días",
                },
                "rate": {"min": "8.5", "max": "12.0"},
            },
        ],
    },
    {
        "id": "bbva",
        "name": "BBVA Continental",
        "type": "bank",
        "sbs_code": "011",
        "products": [
            {
                "id": "bbva-credito-personal",
                "name": "Préstamo Personal BBVA",
                "type": "personal_loan",
                "requirements": {
                    "min_income": 1800,
                    "max_age": 68,
                    "min_age": 18,
                    "min_work_time_months": 8,
                    "max_debt_to_income": 55,
                    "min_credit_score": 370,
                    "documents": ["DNI", "Boletas de pago (3 últimas)", "Certificado de trabajo"],
                    "additional_requirements": ["Cuenta en BBVA de al menos 3 meses"],
                    "restrictions": ["Evaluación interna del banco"],
                },
                "conditions": {
                    "min_amount": 2000,
                    "max_amount": 120000,
                    "min_term_months": 12,
                    "max_term_months": 48,
                    "time_to_approval": "2-5 días",
                },
                "rate": {"min": "17.0", "max": "25.5"},
            },
        ],
    },
    {
        "id": "scotiabank",
        "name": "Scotiabank Perú",
        "type": "bank",
        "sbs_code": "009",
        "products": [
            {
                "id": "scotia-credito-vehicular",
                "name": "Crédito Vehicular Scotia",
                "type": "vehicle_loan",
                "requirements": {
                    "min_income": 2000,
                    "max_age": 70,
                    "min_age": 18,
                    "min_work_time_months": 6,
                    "max_debt_to_income": 50,
                    "min_credit_score": 380,
                    "documents": [
                        "DNI",
                        "Boletas de pago (3 últimas)",
                        "Certificado de trabajo",
                        "Proforma del vehículo",
                    ],
                    "additional_requirements": ["Seguro vehicular todo riesgo", "GPS obligatorio"],
                    "restrictions": ["Vehículos de hasta 5 años de antigüedad"],
                },
                "conditions": {
                    "min_amount": 15000,
                    "max_amount": 200000,
                    "min_term_months": 12,
                    "max_term_months": 84,
                    "down_payment_percent": 20,
                    "time_to_approval": "3-7 días",
                },
                "rate": {"min": "12.0", "max": "18.5"},
            },
        ],
    },
    {
        "id": "mibanco",
        "name": "Mi Banco",
        "type": "bank",
        "sbs_code": "049",
        "products": [
            {
                "id": "mibanco-credito-personal",
                "name": "Crédito Personal Mi Banco",
                "type": "personal_loan",
                "requirements": {
                    "min_income": 800,
                    "max_age": 70,
                    "min_age": 18,
                    "min_work_time_months": 3,
                    "max_debt_to_income": 70,
                    "min_credit_score": 300,
                    "documents": ["DNI", "Boletas de pago (2 últimas)", "Certificado de trabajo"],
                    "additional_requirements": ["Evaluación in situ del negocio"],
                    "restrictions": ["Dirigido a micro y pequeña empresa"],
                },
                "conditions": {
                    "min_amount": 500,
                    "max_amount": 50000,
                    "min_term_months": 6,
                    "max_term_months": 36,
                    "time_to_approval": "1-3 días",
                },
                "rate": {"min": "20.0", "max": "35.0"},
            },
        ],
    },
    {
        "id": "caja-piura",
        "name": "Caja Municipal de Piura",
        "type": "caja",
        "sbs_code": "801",
        "products": [
            {
                "id": "piura-credito-empresarial",
                "name": "Crédito MYPE Caja Piura",
                "type": "business_loan",
                "requirements": {
                    "min_income": 1200,
                    "max_age": 70,
                    "min_age": 21,
                    "min_work_time_months": 12,
                    "max_debt_to_income": 65,
                    "min_credit_score": 320,
                    "documents": ["DNI", "RUC", "Estados financieros", "Declaraciones SUNAT"],
                    "additional_requirements": ["Negocio en funcionamiento mínimo 1 año"],
                    "restrictions": ["Solo para micro y pequeñas empresas"],
                },
                "conditions": {
                    "min_amount": 1000,
                    "max_amount": 80000,
                    "min_term_months": 6,
                    "max_term_months": 48,
                    "time_to_approval": "2-5 días",
                },
                "rate": {"min": "18.0", "max": "30.0"},
            },
        ],
    },
]


@lru_cache(maxsize=1)
def sbs_catalog() -> ProductCatalog:
    """The validated static catalog (built once, immutable)."""
    return load_catalog(SBS_ENTITIES)
