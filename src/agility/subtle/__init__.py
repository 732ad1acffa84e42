"""
Низкоуровневые примитивы, привязанные к ключу.

Модули этого пакета не обращаются к реестру: им передают уже
построенные примитивы или фабрики.
"""
