class InvalidArgument(ValueError):
    """Некорректный аргумент: None вместо обязательной ссылки, qty < 1, отрицательная стоимость"""
