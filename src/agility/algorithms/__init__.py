"""Менеджеры ключей: по одному классу на идентификатор алгоритма."""
