from pathlib import Path

# --- Marching Squares — порядок углов и рёбер ячейки
# Углы ячейки (col, row) перечисляются против часовой стрелки, начиная
# с нижнего левого; «нижний» означает больший индекс строки:
#   3 ┌ 2 ┐ 2
#     3   1
#   0 └ 0 ┘ 1
# Смещения углов относительно (row, col) в порядке CORNER_*
CORNER_OFFSETS: tuple[tuple[int, int], ...] = (
    (1, 0),  # (row+1, col)
    (1, 1),  # (row+1, col+1)
    (0, 1),  # (row, col+1)
    (0, 0),  # (row, col)
)

CORNER_COUNT = 4

# Ребро k соединяет угол k и угол (k+1) mod 4
EDGE_BOTTOM = 0
EDGE_RIGHT = 1
EDGE_TOP = 2
EDGE_LEFT = 3

# Рёбра, вдоль которых интерполированная доля задаёт координату x
HORIZONTAL_EDGES = (EDGE_BOTTOM, EDGE_TOP)
# Рёбра, вдоль которых интерполированная доля задаёт координату y
VERTICAL_EDGES = (EDGE_RIGHT, EDGE_LEFT)

# Рёбра, обход которых идёт против осей мира (x вправо, y вниз по строкам):
# правое — снизу вверх, верхнее — справа налево. Для них t ← 1 - t
REFLECTED_EDGES = (EDGE_RIGHT, EDGE_TOP)

# Базовые точки (середины рёбер) в долях ячейки: (x, y)
LINE_END_POINTS: tuple[tuple[float, float], ...] = (
    (0.5, 1.0),  # низ
    (1.0, 0.5),  # право
    (0.5, 0.0),  # верх
    (0.0, 0.5),  # лево
)

# Минимальный размер сетки по каждой оси для хотя бы одной ячейки
MIN_GRID_SIZE = 2

# --- Marching Squares — именованные маски (бит k = угол k выше уровня)
MS_MASK_EMPTY = 0  # 0b0000 — все ниже уровня
MS_MASK_FULL = 15  # 0b1111 — все выше уровня

# Седловые (шахматные) случаи
MS_MASK_BL_TR = 5  # 0b0101 — нижний левый + верхний правый
MS_MASK_BR_TL = 10  # 0b1010 — нижний правый + верхний левый

MS_NO_CONTOUR_CASES = {MS_MASK_EMPTY, MS_MASK_FULL}
MS_AMBIGUOUS_CASES = (MS_MASK_BL_TR, MS_MASK_BR_TL)

# Вес для усреднения четырёх значений в ячейке (1/4) при разрешении седла
MARCHING_SQUARES_CENTER_WEIGHT = 0.25

# Пары рёбер для седловых случаев
MS_SADDLE_CUT_BL_TR = ((EDGE_BOTTOM, EDGE_LEFT), (EDGE_RIGHT, EDGE_TOP))
MS_SADDLE_CUT_BR_TL = ((EDGE_BOTTOM, EDGE_RIGHT), (EDGE_TOP, EDGE_LEFT))

# --- Параллельная обработка
# Максимальное число потоков для построения изолиний
CONTOUR_PARALLEL_WORKERS = 8
# Минимальное число строк ячеек на одну полосу при разбиении сетки
CONTOUR_MIN_ROWS_PER_BAND = 16
# Периодичность логирования использования памяти (каждые N уровней)
CONTOUR_LOG_MEMORY_EVERY_LEVELS = 50

# --- Профили настроек
# Переменная окружения с каталогом профилей
PROFILES_DIR_ENV = 'ISOLINES_PROFILES_DIR'
# Каталог профилей по умолчанию
DEFAULT_PROFILES_DIR = Path.home() / '.isolines' / 'profiles'
PROFILE_SUFFIX = '.toml'

# --- Входные файлы сетки
NUMPY_GRID_SUFFIX = '.npy'
GRID_NDIM = 2

# --- Логирование ---
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
