from pydantic import BaseModel, field_validator

from contours.builder import contour_levels


class ContourSettings(BaseModel):
    """
    Parameters of one contouring run, gathered in a single model.

    ``grid_size`` is deliberately left unvalidated: zero collapses segments to
    points and a negative size mirrors the mapping.
    """

    model_config = {
        'extra': 'ignore',  # игнорировать лишние поля из профилей
    }

    # Одиночный уровень изолинии
    iso_value: float | None = None
    # Явный список уровней (имеет приоритет над интервалом)
    levels: list[float] = []
    # Интервал между уровнями; уровни строятся по диапазону значений сетки
    level_interval: float | None = None
    # Базовый уровень, от которого отсчитывается интервал
    level_base: float = 0.0

    # Мировые координаты узла (0, 0) и размер ячейки
    lng_start: float = 0.0
    lat_start: float = 0.0
    grid_size: float = 1.0

    # Число потоков построения
    workers: int = 1

    # Отбрасывать отрезки с нечисловыми (inf/nan) координатами
    skip_non_finite: bool = False
    # Разделитель столбцов во входном текстовом файле (None — пробелы)
    delimiter: str | None = None

    @field_validator('level_interval')
    @classmethod
    def validate_interval(cls, v: float | None) -> float | None:
        if v is not None and v <= 0:
            msg = 'Интервал между уровнями должен быть положительным'
            raise ValueError(msg)
        return v

    @field_validator('workers')
    @classmethod
    def validate_workers(cls, v: int) -> int:
        return max(int(v), 1)

    @property
    def has_levels(self) -> bool:
        return bool(self.levels) or self.level_interval is not None

    def resolve_levels(self, min_value: float, max_value: float) -> list[float]:
        """
        Levels to contour for a field spanning ``[min_value, max_value]``.

        Explicit ``levels`` win over ``level_interval``; a lone ``iso_value``
        gives a single level. Raises ValueError when nothing is configured.
        """
        if self.levels:
            return list(self.levels)
        if self.level_interval is not None:
            return contour_levels(
                min_value, max_value, self.level_interval, self.level_base
            )
        if self.iso_value is not None:
            return [self.iso_value]
        msg = 'No iso value or levels configured'
        raise ValueError(msg)
