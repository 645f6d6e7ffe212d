"""Conjunto de dados reutilizável para cenários de teste backend."""

from datetime import datetime

PYME_REGISTRATION = {
    "email": "Owner@Example.com",
    "password": "segredo123",
    "firstName": "Ana",
    "lastName": "Pérez",
    "companyName": "Soluciones Andinas",
    "plan": "pyme",
    "ruc": "1790012345001",
    "address": "Av. Amazonas 100",
    "phone": "022345678",
}

PROFESSIONAL_REGISTRATION = {
    "email": "freelancer@example.com",
    "password": "segredo123",
    "firstName": "Luis",
    "lastName": "Mora",
    "companyName": "Luis Mora Consultor",
    "plan": "professional",
    "cedula": "1712345678",
}

PHYSICAL_ASSET_PAYLOAD = {
    "name": "Servidor Dell R740",
    "type": "physical",
    "serialNumber": "SN-001",
    "manufacturer": "Dell",
    "monthlyCost": 100,
    "annualCost": 1200,
    "status": "active",
    "location": "Rack 1",
}

APPLICATION_ASSET_PAYLOAD = {
    "name": "Portal Clientes",
    "type": "application",
    "applicationType": "custom_development",
    "url": "https://portal.example.com",
    "monthlyCost": 200,
    "annualCost": 2400,
    "domainCost": 15,
    "sslCost": 10,
    "hostingCost": 40,
    "serverCost": 60,
}

CONTRACT_PAYLOAD = {
    "name": "Soporte Red",
    "vendor": "NetCorp",
    "contractType": "support",
    "startDate": "2026-01-01T00:00:00",
    "endDate": "2027-01-01T00:00:00",
    "monthlyCost": 30,
    "annualCost": 360,
    "status": "active",
    "autoRenewal": True,
}

LICENSE_PAYLOAD = {
    "name": "Office 365",
    "vendor": "Microsoft",
    "licenseType": "subscription",
    "maxUsers": 20,
    "currentUsers": 5,
    "monthlyCost": 50,
    "annualCost": 600,
}

MAINTENANCE_PAYLOAD = {
    "maintenanceType": "preventive",
    "title": "Limpieza anual",
    "description": "Limpieza de ventiladores y cambio de pasta térmica",
    "cost": 1200,
    "status": "completed",
    "priority": "medium",
}

FIXED_NOW = datetime(2026, 3, 1, 12, 0, 0)
