#!/usr/bin/env python3
"""
Анализатор метрик AI Mindset Survey
Запуск: python scripts/analyze_metrics.py
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'python'))

from metrics import get_metrics_stats, METRICS_FILE


def print_section(title: str):
    print(f"\n{'='*50}")
    print(f"  {title}")
    print('='*50)


def format_ms(ms: int) -> str:
    if ms >= 1000:
        return f"{ms/1000:.1f}s"
    return f"{ms}ms"


def main():
    print("\n" + "="*50)
    print("   AI MINDSET SURVEY - АНАЛИЗ МЕТРИК")
    print("="*50)

    if not METRICS_FILE.exists():
        print(f"\nФайл метрик не найден: {METRICS_FILE}")
        print("Запустите сервер и отправьте несколько анкет.")
        return

    stats = get_metrics_stats()

    if 'error' in stats:
        print(f"\nОшибка: {stats['error']}")
        return

    # Период
    print_section("ПЕРИОД ДАННЫХ")
    print(f"  Начало: {stats['period']['from']}")
    print(f"  Конец:  {stats['period']['to']}")
    print(f"  Всего событий: {stats['total_events']}")

    # Профили
    print_section("ПРОФИЛИ")
    survey = stats['survey']
    profiles = survey['profiles']
    if profiles:
        total = survey['submissions']
        for name, count in sorted(profiles.items(), key=lambda x: -x[1]):
            pct = round(count / total * 100, 1)
            bar = '#' * int(pct / 5)
            print(f"  {name:24} {count:4} ({pct:5.1f}%) {bar}")
    else:
        print("  Нет анкет")

    # AI советы
    print_section("AI СОВЕТЫ")
    advice = stats['advice']
    if advice['requests'] > 0:
        print(f"  Всего запросов: {advice['requests']}")
        print(f"  Успешных: {advice['ai_success']}")
        print(f"  Fallback: {advice['fallbacks']} ({advice['fallback_rate']}%)")

        if advice['total_ms']['count'] > 0:
            total_ms = advice['total_ms']
            print(f"\n  Время ответа API:")
            print(f"    Минимум: {format_ms(total_ms['min'])}")
            print(f"    Максимум: {format_ms(total_ms['max'])}")
            print(f"    Среднее: {format_ms(total_ms['avg'])}")
    else:
        print("  Нет данных о советах")

    # Ошибки
    print_section("ОШИБКИ")
    errors = stats['errors']
    if errors['count'] > 0:
        print(f"  Всего ошибок: {errors['count']}")
        for error_type, count in sorted(errors['by_type'].items(), key=lambda x: -x[1]):
            print(f"    {error_type:20} {count}")
    else:
        print("  Ошибок не обнаружено")

    print("\n" + "="*50)
    print(f"  Файл метрик: {METRICS_FILE}")
    print("="*50 + "\n")


if __name__ == '__main__':
    main()
