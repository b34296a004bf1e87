"""Interfaces/abstracciones del Core.

Por qué:
- Define contratos (Protocol) que implementa el cliente concreto.
- Las entidades aumentadas dependen del contrato, no de `Webflow`, así no
  hay import circular entre dominio y servicios.
"""
