import csv
import io
import sys
from functools import partial

from PySide6.QtWidgets import (
    QApplication, QMainWindow, QWidget, QVBoxLayout, QHBoxLayout,
    QTextEdit, QPushButton, QLineEdit, QLabel, QFileDialog, QCheckBox,
    QMessageBox, QGridLayout, QStatusBar, QTableWidget, QTableWidgetItem,
    QDialog, QTabWidget
)
from PySide6.QtGui import QFont

from .alphabet import ALPHABET, preprocess_text
from .brute_force import crack_by_brute_force, dump_all_variants
from .cipher import caesar_cipher
from .fileio import read_text, write_text
from .operations import VAL, transform_file
from .stat_analysis import count_frequencies, crack_by_stat_analysis, frequency_table, normalize


def text_source(text: str):
    # Для взломщиков: каждый вызов открывает новый поток с начала текста
    return partial(io.StringIO, text)


def frequency_rows(text: str):
    """(символ, индекс, количество, доля) по символам алфавита, частые сверху."""
    counts = count_frequencies(io.StringIO(text), ALPHABET)
    shares = dict(frequency_table(normalize(counts), ALPHABET))
    return [
        (ch, ALPHABET.index_of(ch), counts[ALPHABET.index_of(ch)], p)
        for ch, p in shares.items()
    ]


def display_symbol(ch: str) -> str:
    return "пробел" if ch == " " else ch


# ================== ДИАЛОГ ТАБЛИЦЫ ЧАСТОТ ==================
class FrequencyTableDialog(QDialog):
    HEADERS = ("Символ", "Индекс", "Количество", "Вероятность")

    def __init__(self, parent=None, text="", title="Частоты символов алфавита"):
        super().__init__(parent)
        self.rows = frequency_rows(text)
        self.outside = sum(1 for ch in text if ch not in ALPHABET)
        self.setWindowTitle(title)
        self.resize(460, 640)
        self.setup_ui()

    def setup_ui(self):
        layout = QVBoxLayout(self)
        self.table_widget = QTableWidget(len(self.rows), len(self.HEADERS))
        self.table_widget.setHorizontalHeaderLabels(list(self.HEADERS))
        self.table_widget.setEditTriggers(QTableWidget.EditTrigger.NoEditTriggers)
        self.table_widget.verticalHeader().setVisible(False)

        for row, (char, idx, count, prob) in enumerate(self.rows):
            cells = (display_symbol(char), str(idx), str(count), f"{prob:.4f}")
            for col, value in enumerate(cells):
                self.table_widget.setItem(row, col, QTableWidgetItem(value))
        layout.addWidget(self.table_widget)

        total = sum(count for _, _, count, _ in self.rows)
        self.summary_label = QLabel(
            f"Символов алфавита: {total}, вне алфавита: {self.outside}"
        )
        layout.addWidget(self.summary_label)

        buttons = QHBoxLayout()
        save_button = QPushButton("Сохранить CSV")
        save_button.clicked.connect(self.save_table)
        close_button = QPushButton("Закрыть")
        close_button.clicked.connect(self.accept)
        buttons.addStretch(1)
        buttons.addWidget(save_button)
        buttons.addWidget(close_button)
        layout.addLayout(buttons)

    def export_csv(self, file_path):
        with open(file_path, 'w', encoding='utf-8-sig', newline='') as f:
            writer = csv.writer(f)
            writer.writerow(self.HEADERS)
            for char, idx, count, prob in self.rows:
                writer.writerow([char, idx, count, f"{prob:.6f}"])

    def save_table(self):
        file_path, _ = QFileDialog.getSaveFileName(
            self, "Сохранить таблицу частот", "frequency_table.csv", "CSV files (*.csv)"
        )
        if file_path:
            try:
                self.export_csv(file_path)
                QMessageBox.information(self, "Успех", f"Таблица успешно сохранена в {file_path}")
            except OSError as e:
                QMessageBox.critical(self, "Ошибка", f"Не удалось сохранить файл: {e}")


# ================== ВКЛАДКА ШИФРОВАНИЯ ==================
class EncryptionTab(QWidget):
    def __init__(self):
        super().__init__()
        self.setup_ui()

    def setup_ui(self):
        main_layout = QVBoxLayout(self)

        top_layout = QHBoxLayout()
        self.open_button = QPushButton("Открыть .txt файл")
        self.open_button.clicked.connect(self.open_file)
        self.save_button = QPushButton("Сохранить результат")
        self.save_button.clicked.connect(self.save_file)
        top_layout.addWidget(self.open_button)
        top_layout.addWidget(self.save_button)
        top_layout.addStretch(1)
        main_layout.addLayout(top_layout)

        text_layout = QHBoxLayout()
        original_group = QVBoxLayout()
        original_group.addWidget(QLabel("Исходный текст:"))
        self.original_text_edit = QTextEdit()
        self.original_text_edit.setPlaceholderText("Введите или вставьте сюда текст...")
        original_group.addWidget(self.original_text_edit)
        text_layout.addLayout(original_group)

        result_group = QVBoxLayout()
        result_group.addWidget(QLabel("Результат:"))
        self.result_text_edit = QTextEdit()
        self.result_text_edit.setReadOnly(True)
        result_group.addWidget(self.result_text_edit)
        text_layout.addLayout(result_group)
        main_layout.addLayout(text_layout)

        control_layout = QGridLayout()
        key_label = QLabel(f"Ключ (0-{len(ALPHABET) - 1}):")
        self.key_input = QLineEdit()
        self.key_input.setPlaceholderText("Например: 3")
        self.preprocess_check = QCheckBox("Предобработка (нижний регистр, пробелы, кавычки)")

        self.encrypt_button = QPushButton("Зашифровать")
        self.encrypt_button.clicked.connect(self.encrypt_text)
        self.decrypt_button = QPushButton("Расшифровать")
        self.decrypt_button.clicked.connect(self.decrypt_text)

        self.freq_original_button = QPushButton("Частота исходного")
        self.freq_original_button.clicked.connect(self.show_frequency_table_original)
        self.freq_result_button = QPushButton("Частота результата")
        self.freq_result_button.clicked.connect(self.show_frequency_table_result)

        control_layout.addWidget(key_label, 0, 0)
        control_layout.addWidget(self.key_input, 0, 1)
        control_layout.addWidget(self.preprocess_check, 1, 0, 1, 2)
        control_layout.addWidget(self.encrypt_button, 2, 0)
        control_layout.addWidget(self.decrypt_button, 2, 1)
        control_layout.addWidget(self.freq_original_button, 3, 0)
        control_layout.addWidget(self.freq_result_button, 3, 1)
        main_layout.addLayout(control_layout)

        self.status_bar = QStatusBar()
        main_layout.addWidget(self.status_bar)
        self.status_bar.showMessage("Готов к работе. Введите текст или откройте файл.")

    def open_file(self):
        file_path, _ = QFileDialog.getOpenFileName(
            self, "Открыть текстовый файл", "", "Текстовые файлы (*.txt)"
        )
        if file_path:
            try:
                self.original_text_edit.setPlainText(read_text(VAL.ensure_file_readable(file_path)))
                self.status_bar.showMessage("Файл успешно открыт.")
            except (OSError, ValueError) as e:
                QMessageBox.critical(self, "Ошибка", f"Не удалось прочитать файл: {e}")

    def save_file(self):
        txt = self.result_text_edit.toPlainText()
        if not txt:
            QMessageBox.warning(self, "Внимание", "Нет текста для сохранения.")
            return
        file_path, _ = QFileDialog.getSaveFileName(
            self, "Сохранить результат", "", "Текстовые файлы (*.txt)"
        )
        if file_path:
            try:
                write_text(VAL.ensure_parent_writable(file_path), txt)
                self.status_bar.showMessage("Результат сохранен.")
            except (OSError, ValueError) as e:
                QMessageBox.critical(self, "Ошибка", f"Не удалось сохранить файл: {e}")

    def source_text(self):
        raw = self.original_text_edit.toPlainText()
        if self.preprocess_check.isChecked():
            raw = preprocess_text(raw, ALPHABET)
        return raw

    def run_cipher(self, encrypt: bool):
        try:
            key = VAL.parse_key(self.key_input.text())
            raw = self.source_text()
            if not raw:
                QMessageBox.warning(self, "Внимание", "Нет исходного текста.")
                return
            self.result_text_edit.setPlainText(caesar_cipher(raw, key, encrypt, ALPHABET))
            self.status_bar.showMessage(
                f"{'Зашифровано' if encrypt else 'Расшифровано'} (ключ {key})."
            )
        except ValueError as e:
            QMessageBox.critical(self, "Ошибка", str(e))

    def encrypt_text(self):
        self.run_cipher(True)

    def decrypt_text(self):
        self.run_cipher(False)

    def show_frequency_table(self, text: str, title: str):
        if not text:
            QMessageBox.warning(self, "Внимание", "Текст пуст.")
            return
        FrequencyTableDialog(self, text, title).exec()

    def show_frequency_table_original(self):
        self.show_frequency_table(self.original_text_edit.toPlainText(), "Частоты исходного текста")

    def show_frequency_table_result(self):
        self.show_frequency_table(self.result_text_edit.toPlainText(), "Частоты результата")


# ================== ВКЛАДКА ФАЙЛОВ ==================
class FileTab(QWidget):
    def __init__(self):
        super().__init__()
        self.setup_ui()

    def setup_ui(self):
        layout = QGridLayout(self)

        self.input_path = QLineEdit()
        self.input_button = QPushButton("Выбрать")
        self.input_button.clicked.connect(self.choose_input)
        self.output_path = QLineEdit()
        self.output_button = QPushButton("Сохранить в")
        self.output_button.clicked.connect(self.choose_output)
        self.key_input = QLineEdit()

        self.encrypt_button = QPushButton("Шифровать")
        self.encrypt_button.clicked.connect(self.encrypt_file)
        self.decrypt_button = QPushButton("Расшифровать")
        self.decrypt_button.clicked.connect(self.decrypt_file)

        layout.addWidget(QLabel("Исходный файл:"), 0, 0)
        layout.addWidget(self.input_path, 0, 1)
        layout.addWidget(self.input_button, 0, 2)
        layout.addWidget(QLabel("Результат в:"), 1, 0)
        layout.addWidget(self.output_path, 1, 1)
        layout.addWidget(self.output_button, 1, 2)
        layout.addWidget(QLabel("Ключ:"), 2, 0)
        layout.addWidget(self.key_input, 2, 1)
        layout.addWidget(self.encrypt_button, 3, 0)
        layout.addWidget(self.decrypt_button, 3, 1)
        layout.setRowStretch(4, 1)

        self.status_bar = QStatusBar()
        layout.addWidget(self.status_bar, 5, 0, 1, 3)

    def choose_input(self):
        file_path, _ = QFileDialog.getOpenFileName(self, "Исходный файл", "", "Text files (*.txt)")
        if file_path:
            self.input_path.setText(file_path)

    def choose_output(self):
        file_path, _ = QFileDialog.getSaveFileName(self, "Файл результата", "", "Text files (*.txt)")
        if file_path:
            self.output_path.setText(file_path)

    def run_file(self, encrypt: bool):
        try:
            key = VAL.parse_key(self.key_input.text())
            out = transform_file(
                self.input_path.text().strip(), self.output_path.text().strip(), key, decrypt=not encrypt
            )
            message = f"{'Зашифровано' if encrypt else 'Расшифровано'} в {out}"
            self.status_bar.showMessage(message)
            QMessageBox.information(self, "Готово", message)
        except (OSError, ValueError) as e:
            QMessageBox.critical(self, "Ошибка", str(e))

    def encrypt_file(self):
        self.run_file(True)

    def decrypt_file(self):
        self.run_file(False)


# ================== ВКЛАДКА КРИПТОАНАЛИЗА ==================
class CryptanalysisTab(QWidget):
    def __init__(self):
        super().__init__()
        self.sample_text = ""
        self.setup_ui()

    def setup_ui(self):
        main_layout = QVBoxLayout(self)

        top_layout = QHBoxLayout()
        self.open_button = QPushButton("Открыть .txt файл")
        self.open_button.clicked.connect(self.load_encrypted_file)
        self.save_button = QPushButton("Сохранить результат")
        self.save_button.clicked.connect(self.save_decrypted_result)
        self.sample_button = QPushButton("Загрузить образец")
        self.sample_button.clicked.connect(self.load_sample_file)
        top_layout.addWidget(self.open_button)
        top_layout.addWidget(self.save_button)
        top_layout.addWidget(self.sample_button)
        top_layout.addStretch(1)
        main_layout.addLayout(top_layout)

        self.sample_label = QLabel("Образец не загружен.")
        main_layout.addWidget(self.sample_label)

        text_layout = QHBoxLayout()
        encrypted_group = QVBoxLayout()
        encrypted_group.addWidget(QLabel("Зашифрованный текст:"))
        self.encrypted_input = QTextEdit()
        self.encrypted_input.setPlaceholderText("Вставьте зашифрованный текст...")
        encrypted_group.addWidget(self.encrypted_input)
        text_layout.addLayout(encrypted_group)

        result_group = QVBoxLayout()
        result_group.addWidget(QLabel("Результат расшифровки:"))
        self.decrypted_output = QTextEdit()
        self.decrypted_output.setReadOnly(True)
        self.decrypted_output.setPlaceholderText("Расшифровка появится здесь...")
        result_group.addWidget(self.decrypted_output)
        text_layout.addLayout(result_group)
        main_layout.addLayout(text_layout)

        control_layout = QGridLayout()
        self.brute_button = QPushButton("1. Перебор (оценка по слогам)")
        self.brute_button.clicked.connect(self.brute_force)
        self.variants_button = QPushButton("2. Все варианты")
        self.variants_button.clicked.connect(self.all_variants)
        self.stat_button = QPushButton("3. Статистический анализ")
        self.stat_button.clicked.connect(self.stat_analysis)

        self.freq_encrypted_button = QPushButton("Частота зашифрованного")
        self.freq_encrypted_button.clicked.connect(self.show_encrypted_frequency)
        self.freq_sample_button = QPushButton("Частота образца")
        self.freq_sample_button.clicked.connect(self.show_sample_frequency)

        control_layout.addWidget(self.brute_button, 0, 0)
        control_layout.addWidget(self.variants_button, 0, 1)
        control_layout.addWidget(self.stat_button, 0, 2)
        control_layout.addWidget(self.freq_encrypted_button, 1, 0)
        control_layout.addWidget(self.freq_sample_button, 1, 1)
        main_layout.addLayout(control_layout)

        self.status_bar = QStatusBar()
        main_layout.addWidget(self.status_bar)
        self.status_bar.showMessage("Готов к анализу. Введите текст или откройте файл.")

    def load_encrypted_file(self):
        file_path, _ = QFileDialog.getOpenFileName(
            self, "Открыть зашифрованный текст", "", "Текстовые файлы (*.txt)"
        )
        if file_path:
            try:
                self.encrypted_input.setPlainText(read_text(VAL.ensure_file_readable(file_path)))
                self.status_bar.showMessage("Файл загружен.")
            except (OSError, ValueError) as e:
                QMessageBox.critical(self, "Ошибка", f"Не удалось прочитать файл: {e}")

    def load_sample_file(self):
        file_path, _ = QFileDialog.getOpenFileName(
            self, "Открыть репрезентативный текст", "", "Текстовые файлы (*.txt)"
        )
        if file_path:
            try:
                self.set_sample(read_text(VAL.ensure_file_readable(file_path)), file_path)
            except (OSError, ValueError) as e:
                QMessageBox.critical(self, "Ошибка", f"Не удалось прочитать образец: {e}")

    def set_sample(self, text: str, name: str = ""):
        self.sample_text = text
        self.sample_label.setText(f"Образец: {name} ({len(text)} символов)")
        self.status_bar.showMessage("Образец загружен.")

    def save_decrypted_result(self):
        res = self.decrypted_output.toPlainText()
        if not res:
            QMessageBox.warning(self, "Внимание", "Нет текста для сохранения.")
            return
        file_path, _ = QFileDialog.getSaveFileName(
            self, "Сохранить результат", "", "Текстовые файлы (*.txt)"
        )
        if file_path:
            try:
                write_text(VAL.ensure_parent_writable(file_path), res)
                self.status_bar.showMessage("Результат сохранен.")
            except (OSError, ValueError) as e:
                QMessageBox.critical(self, "Ошибка", f"Не удалось сохранить: {e}")

    def ciphertext(self):
        text = self.encrypted_input.toPlainText()
        if not text:
            QMessageBox.warning(self, "Внимание", "Введите зашифрованный текст.")
        return text

    def brute_force(self):
        text = self.ciphertext()
        if not text:
            return
        result = crack_by_brute_force(text_source(text), ALPHABET)
        self.decrypted_output.setPlainText(result.text)
        self.status_bar.showMessage(f"Найден ключ: {result.key}, оценка слогов: {result.score:.3f}")

    def all_variants(self):
        text = self.ciphertext()
        if not text:
            return
        buf = io.StringIO()
        dump_all_variants(text_source(text), buf, ALPHABET)
        self.decrypted_output.setPlainText(buf.getvalue())
        self.status_bar.showMessage(f"Записаны все {len(ALPHABET)} вариантов.")

    def stat_analysis(self):
        text = self.ciphertext()
        if not text:
            return
        if not self.sample_text:
            QMessageBox.warning(self, "Внимание", "Сначала загрузите репрезентативный текст.")
            return
        buf = io.StringIO()
        result = crack_by_stat_analysis(text_source(text), text_source(self.sample_text), buf, ALPHABET)
        self.decrypted_output.setPlainText(buf.getvalue())
        message = f"Статистический анализ выбрал ключ → {result.key} (χ² = {result.chi_squared:.6f})"
        self.status_bar.showMessage(message)
        QMessageBox.information(self, "Готово", message)

    def show_encrypted_frequency(self):
        text = self.encrypted_input.toPlainText()
        if not text:
            QMessageBox.warning(self, "Внимание", "Текст пуст.")
            return
        FrequencyTableDialog(self, text, "Частоты шифротекста").exec()

    def show_sample_frequency(self):
        if not self.sample_text:
            QMessageBox.warning(self, "Внимание", "Образец не загружен.")
            return
        FrequencyTableDialog(self, self.sample_text, "Частоты образца").exec()


# ================== ГЛАВНОЕ ОКНО ==================
class CipherApp(QMainWindow):
    def __init__(self):
        super().__init__()
        self.setWindowTitle("Шифр Цезаря и криптоанализ")
        self.setGeometry(100, 100, 1200, 800)
        self.tabs = QTabWidget()
        self.setCentralWidget(self.tabs)
        self.encryption_tab = EncryptionTab()
        self.file_tab = FileTab()
        self.cryptanalysis_tab = CryptanalysisTab()
        self.tabs.addTab(self.encryption_tab, "Текст")
        self.tabs.addTab(self.file_tab, "Файлы")
        self.tabs.addTab(self.cryptanalysis_tab, "Криптоанализ")
        self.status_bar = QStatusBar()
        self.setStatusBar(self.status_bar)
        self.status_bar.showMessage("Готов к работе.")


def run_gui() -> int:
    app = QApplication.instance() or QApplication(sys.argv)
    app.setFont(QFont(app.font().family(), 10))
    window = CipherApp()
    window.show()
    return app.exec()
