"""
Модуль для поиска вхождений подстрок в строке.

Содержит две независимые ветки:
- Ахо-Корасик: по набору шаблонов строится бор (trie), для каждого узла
  вычисляются суффиксная ссылка, кэш переходов (goto) и конечная ссылка (up).
  Текст просматривается один раз, все шаблоны, оканчивающиеся в текущей
  позиции, собираются по цепочке конечных ссылок.
- Кнут-Моррис-Пратт: для одного шаблона считается префикс-функция, затем
  текст просматривается один раз без повторных сравнений.

Сравнение идёт по "сырым" значениям символов: подходят как str, так и bytes.

Сложность:
    построение автомата - O(l), l - суммарная длина шаблонов;
    поиск Ахо-Корасик - O(n + k), k - число найденных вхождений;
    КМП - O(n + m).
"""
from collections import deque
from typing import Dict, Hashable, Iterator, List, Optional, Sequence, Tuple, Union

Text = Union[str, bytes]

# Индекс корня в массиве узлов
ROOT = 0


# ------------------- AHO-CORASICK -------------------
class TrieNode:

    __slots__ = ['children', 'parent', 'char_to_parent', 'suffix_link',
                 'output_link', 'goto', 'is_terminal', 'pattern_indices']

    def __init__(self, parent: Optional[int] = None,
                 char_to_parent: Optional[Hashable] = None):
        """
        Узел бора. Все ссылки хранятся как индексы в массиве узлов автомата.
        - children: переходы по символам в дочерние узлы (рёбра бора)
        - parent: индекс родителя, у корня None
        - char_to_parent: символ на ребре от родителя к узлу
        - suffix_link: суффиксная ссылка
        - output_link: конечная ссылка (up) на ближайший терминальный узел
          по цепочке суффиксных ссылок
        - goto: кэш уже вычисленных переходов автомата
        - pattern_indices: индексы шаблонов, оканчивающихся в этом узле
        """
        self.children: Dict[Hashable, int] = {}
        self.parent = parent
        self.char_to_parent = char_to_parent
        self.suffix_link: Optional[int] = None
        self.output_link: Optional[int] = None
        self.goto: Dict[Hashable, int] = {}
        self.is_terminal = False
        self.pattern_indices: List[int] = []

    def __repr__(self) -> str:
        """Строковое представление узла для отладки."""
        return (f"TrieNode(char={self.char_to_parent!r}, "
                f"suffix_link={self.suffix_link}, "
                f"output_link={self.output_link}, "
                f"patterns={self.pattern_indices})")


class ACAutomaton:
    """
    Автомат Ахо-Корасик для фиксированного набора шаблонов.

    Шаблоны добавляются до построения ссылок; после build() автомат можно
    использовать для любого числа просмотров текста. Кэш переходов после
    заполнения не сбрасывается, поэтому добавлять шаблоны в построенный
    автомат нельзя.
    """

    def __init__(self, patterns: Sequence[Text] = ()):
        self.nodes: List[TrieNode] = [TrieNode()]
        self.pattern_lengths: Dict[int, int] = {}
        self.built = False
        for index, pattern in enumerate(patterns):
            self.insert(pattern, index)
        self.build()

    def __len__(self) -> int:
        return len(self.nodes)

    def insert(self, pattern: Text, index: int) -> int:
        """
        Добавляет шаблон в бор, создавая недостающие узлы.

        Пустой шаблон не создаёт рёбер и помечает терминальным корень.
        Одинаковые шаблоны не объединяются: каждый индекс записывается
        в конечный узел отдельно.

        :param pattern: Строка-шаблон
        :param index: Индекс шаблона
        :return: Индекс конечного узла
        """
        if self.built:
            raise RuntimeError("Автомат уже построен: добавление шаблонов запрещено")

        current = ROOT
        for char in pattern:
            child = self.nodes[current].children.get(char)
            if child is None:
                child = len(self.nodes)
                self.nodes.append(TrieNode(current, char))
                self.nodes[current].children[char] = child
            current = child

        node = self.nodes[current]
        node.is_terminal = True
        node.pattern_indices.append(index)
        self.pattern_lengths[index] = len(pattern)
        return current

    def build(self) -> None:
        """
        Строит суффиксные и конечные ссылки обходом бора в ширину.

        Дети корня ссылаются на корень. Для остальных узлов идём по
        суффиксным ссылкам родителя, пока не найдётся ребро с тем же
        символом. Обход в ширину гарантирует, что ссылки более коротких
        узлов уже посчитаны.
        """
        root = self.nodes[ROOT]
        root.suffix_link = ROOT
        root.output_link = ROOT

        queue = deque()
        for child in root.children.values():
            node = self.nodes[child]
            node.suffix_link = ROOT
            node.output_link = ROOT
            queue.append(child)

        while queue:
            current = queue.popleft()
            for char, child in self.nodes[current].children.items():
                fail = self.nodes[current].suffix_link
                while fail != ROOT and char not in self.nodes[fail].children:
                    fail = self.nodes[fail].suffix_link
                link = self.nodes[fail].children.get(char, ROOT)

                node = self.nodes[child]
                node.suffix_link = link
                target = self.nodes[link]
                node.output_link = link if target.is_terminal else target.output_link
                queue.append(child)

        self.built = True

    def suffix_link(self, state: int) -> int:
        """Суффиксная ссылка узла."""
        return self.nodes[state].suffix_link

    def output_link(self, state: int) -> int:
        """Конечная ссылка (up) узла."""
        return self.nodes[state].output_link

    def transition(self, state: int, char: Hashable) -> int:
        """
        Функция переходов автомата (goto).

        Если у узла есть ребро по символу - переходим по нему, у корня без
        ребра остаёмся в корне, иначе берём переход суффиксной ссылки.
        Результат запоминается для всех узлов, пройденных по цепочке.
        """
        cached = self.nodes[state].goto.get(char)
        if cached is not None:
            return cached

        visited = []
        current = state
        while True:
            node = self.nodes[current]
            if char in node.goto:
                target = node.goto[char]
                break
            visited.append(current)
            if char in node.children:
                target = node.children[char]
                break
            if current == ROOT:
                target = ROOT
                break
            current = node.suffix_link

        for passed in visited:
            self.nodes[passed].goto[char] = target
        return target

    def iter_matches(self, text: Text) -> Iterator[Tuple[int, int]]:
        """
        Просматривает текст и выдаёт все вхождения непустых шаблонов.

        :param text: Текст для поиска
        :return: Пары (позиция последнего символа вхождения, индекс шаблона)
        """
        state = ROOT
        for position, char in enumerate(text):
            state = self.transition(state, char)
            node = self.nodes[state]
            terminal = state if node.is_terminal else node.output_link
            while terminal != ROOT:
                for pattern_index in self.nodes[terminal].pattern_indices:
                    yield position, pattern_index
                terminal = self.nodes[terminal].output_link

    def contains_all(self, text: Text, required_count: int) -> bool:
        """
        Проверяет, что каждый шаблон с индексом из [0, required_count)
        встречается в тексте хотя бы один раз.

        Поиск прекращается, как только найдены все нужные шаблоны.
        Индексы вне диапазона игнорируются. Пустой шаблон считается
        найденным в любом тексте.

        :param text: Текст для поиска
        :param required_count: Сколько первых шаблонов требуется найти
        :return: True, если найдены все требуемые шаблоны
        """
        if required_count < 0:
            raise ValueError(f"Неверное количество шаблонов: {required_count}")

        found = [False] * required_count
        found_count = 0

        def mark(pattern_index: int) -> None:
            nonlocal found_count
            if pattern_index < required_count and not found[pattern_index]:
                found[pattern_index] = True
                found_count += 1

        for pattern_index in self.nodes[ROOT].pattern_indices:
            mark(pattern_index)
        if found_count == required_count:
            return True

        for _, pattern_index in self.iter_matches(text):
            mark(pattern_index)
            if found_count == required_count:
                return True
        return found_count == required_count

    def find_all(self, text: Text) -> Dict[int, List[int]]:
        """
        Находит все вхождения всех шаблонов.

        :param text: Текст для поиска
        :return: Словарь {индекс шаблона: список индексов начала вхождений};
                 для пустых шаблонов список пуст
        """
        result: Dict[int, List[int]] = {index: [] for index in self.pattern_lengths}
        for end, pattern_index in self.iter_matches(text):
            result[pattern_index].append(end - self.pattern_lengths[pattern_index] + 1)
        return result


def ac_search(text: Text,
              patterns: Sequence[Text],
              required_count: Optional[int] = None) -> bool:
    """
    Строит автомат по шаблонам и ищет их в тексте.

    :param text: Текст, в котором ищем
    :param patterns: Список шаблонов
    :param required_count: Сколько первых шаблонов должно встретиться,
                           по умолчанию все
    :return: True, если каждый требуемый шаблон встречается в тексте
    """
    if required_count is None:
        required_count = len(patterns)
    return ACAutomaton(patterns).contains_all(text, required_count)

# ------------------- END AHO-CORASICK -------------------


def prefix_function(pattern: Text) -> List[int]:
    """
    Префикс-функция шаблона: для каждой позиции i длина наибольшего
    собственного префикса pattern[0..i], совпадающего с его суффиксом.
    """
    table = [0] * len(pattern)
    k = 0  # длина текущего совпавшего префикса
    for i in range(1, len(pattern)):
        while k > 0 and pattern[k] != pattern[i]:
            k = table[k - 1]
        if pattern[k] == pattern[i]:
            k += 1
        table[i] = k
    return table


def kmp_search(text: Text, pattern: Text) -> Tuple[List[int], int]:
    """
    Поиск подстроки в строке алгоритмом Кнута-Морриса-Пратта.

    При несовпадении символов сравнение не начинается заново: по
    префикс-функции выбирается позиция в шаблоне, с которой можно
    продолжить. Перекрывающиеся вхождения тоже находятся
    ("aa" в "aaa" даёт 0 и 1).

    Параметры:
        text: строка, в которой ведётся поиск.
        pattern: подстрока, которую требуется найти.

    Возвращает:
        (список индексов начала вхождений, количество вхождений).
        Для пустого шаблона или шаблона длиннее текста - ([], 0).
    """
    size = len(pattern)
    if size == 0 or len(text) < size:
        return [], 0

    table = prefix_function(pattern)
    matches: List[int] = []
    matched = 0

    for cur, char in enumerate(text):
        # Откатываемся по префикс-функции, пока символы не совпадут
        while matched > 0 and pattern[matched] != char:
            matched = table[matched - 1]

        if pattern[matched] == char:
            matched += 1

        if matched == size:
            matches.append(cur - size + 1)
            matched = table[matched - 1]

    return matches, len(matches)
