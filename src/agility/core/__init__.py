"""Ядро: исключения, протоколы, менеджеры ключей и реестр."""
