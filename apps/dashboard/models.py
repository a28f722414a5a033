"""
Dashboard 앱은 자체 모델을 가지지 않습니다.
Transaction 데이터를 메모리에서 집계합니다 (utils.py).

주요 기능:
- 이번 달 수입/지출/잔액 요약 + 월 이동
- 월별 히스토리
"""
